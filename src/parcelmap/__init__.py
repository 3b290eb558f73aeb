"""parcelmap: locate a parcel by map click or address and show its attributes."""

__version__ = "0.1.0"
