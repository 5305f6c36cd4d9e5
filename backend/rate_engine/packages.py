"""
rate_engine/packages.py

Package pricing aggregator.
"""
from decimal import Decimal
from typing import Iterable

from rate_engine.models import (
    ComponentLine, ComponentType, GuestCounts, PackagePricing, RatePackageComponent,
)
from rate_engine.money import ZERO


def component_unit_price(component: RatePackageComponent, guests: GuestCounts) -> Decimal:
    """
    Per-unit price of a component for the given guests.

    Age-band prices, when any is set, are multiplied by the guest count in
    each band (unset bands count as zero). Otherwise ``unit_price`` applies,
    with None meaning free.
    """
    if component.has_age_band_pricing:
        return (
            (component.price_adult or ZERO) * guests.adults
            + (component.price_child or ZERO) * guests.children
            + (component.price_infant or ZERO) * guests.infants
        )
    return component.unit_price or ZERO


def price_component(component: RatePackageComponent, guests: GuestCounts) -> ComponentLine:
    component.validate()
    unit = component_unit_price(component, guests)
    line_total = unit * component.quantity
    if component.component_type == ComponentType.DISCOUNT:
        line_total = -abs(line_total)
    return ComponentLine(
        component_id=component.id,
        component_type=component.component_type,
        component_name=component.component_name,
        quantity=component.quantity,
        unit_price=unit,
        line_total=line_total,
        is_included=bool(component.is_included),
    )


def price_components(
    components: Iterable[RatePackageComponent],
    guest_counts: GuestCounts,
) -> PackagePricing:
    """
    Aggregate package components into an extras total.

    Only components billed as extras (``is_included`` False) add to
    ``extras_total``. Included components add nothing to it but their value
    is reported in ``included_value`` and in the itemised lines.

    Args:
        components: Components of the rate plan; inactive ones are skipped.
        guest_counts: Adults, children and infants in the room.

    Returns:
        PackagePricing with unrounded totals and one line per active component.
    """
    extras_total = ZERO
    included_value = ZERO
    lines = []

    for component in components:
        if not component.is_active:
            continue
        line = price_component(component, guest_counts)
        lines.append(line)
        if line.is_included:
            included_value += line.line_total
        else:
            extras_total += line.line_total

    return PackagePricing(extras_total=extras_total, included_value=included_value, lines=lines)


__all__ = ["price_components", "price_component", "component_unit_price"]
