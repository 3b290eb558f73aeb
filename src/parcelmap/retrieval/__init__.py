"""External lookups: geocoding and parcel data over HTTP."""
