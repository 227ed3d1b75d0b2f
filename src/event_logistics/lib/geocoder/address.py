"""Human-readable address formatting from structured components."""

from event_logistics.lib.geocoder.base import AddressDetails


def format_full_address(address: AddressDetails) -> str:
    """Join the available components into a single comma-separated line.

    Order is fixed: street (``road, house_number`` when both are known),
    neighbourhood, suburb, city/town/village (first available), county,
    state, postcode, country.  Absent components are omitted.

    Args:
        address: Structured components of a candidate.

    Returns:
        The formatted address, or an empty string if no component is set.
    """
    parts: list[str] = []

    if address.road and address.house_number:
        parts.append(f"{address.road}, {address.house_number}")
    elif address.road:
        parts.append(address.road)

    parts.extend(
        part
        for part in (
            address.neighbourhood,
            address.suburb,
            address.locality,
            address.county,
            address.state,
            address.postcode,
            address.country,
        )
        if part
    )
    return ", ".join(parts)


def compose_address(*parts: str | None) -> str:
    """Comma-join the non-blank parts of an address (e.g. street, city, country)."""
    return ", ".join(p.strip() for p in parts if p and p.strip())
