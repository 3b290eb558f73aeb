"""View glue: map widget contract and parcel details panel."""
