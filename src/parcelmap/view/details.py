"""Parcel details panel text.

Address, owner, area and FAR are always listed (N/A when missing); the
other attributes only appear when the data source reported them. A
reported zero is printed as 0, never hidden and never shown as N/A.
"""

from parcelmap.core.types import LocationState, ParcelRecord

NA = "N/A"


def _number(value: float) -> str:
    """7500.0 -> '7,500', 0.004 -> '0.004', 0.0 -> '0'."""
    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,}"


def format_parcel_details(parcel: ParcelRecord) -> list[str]:
    lines = [
        "Parcel Details",
        f"Address: {parcel.address or NA}",
        f"Owner: {parcel.owner or NA}",
    ]
    area = parcel.area_sqft
    lines.append(f"Area: {_number(area)} sqft" if area is not None else f"Area: {NA}")
    if parcel.city is not None:
        lines.append(f"City: {parcel.city}")
    if parcel.state is not None:
        lines.append(f"State: {parcel.state}")
    if parcel.zip_code is not None:
        lines.append(f"Zip Code: {parcel.zip_code}")

    far = parcel.floor_area_ratio
    lines.append(f"FAR: {_number(far) if far is not None else NA}")

    if parcel.zoning_code is not None:
        lines.append(f"Zoning Code: {parcel.zoning_code}")
    if parcel.zoning_description is not None:
        lines.append(f"Zoning Description: {parcel.zoning_description}")
    if parcel.max_building_height_ft is not None:
        lines.append(f"Max Building Height: {_number(parcel.max_building_height_ft)} ft")
    if parcel.max_density_du_per_acre is not None:
        lines.append(f"Max Density: {_number(parcel.max_density_du_per_acre)} DU/acre")
    return lines


def popup_lines(state: LocationState) -> list[str]:
    """Marker popup: focus coordinates followed by the parcel panel."""
    lines = [
        f"Latitude: {state.focus.latitude}",
        f"Longitude: {state.focus.longitude}",
    ]
    if state.loading:
        lines.append("Loading parcel details...")
    elif state.parcel is not None:
        lines.extend(format_parcel_details(state.parcel))
    else:
        lines.append("No parcel details available.")
    return lines
