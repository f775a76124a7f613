"""Buy N, get X% off.

A merchant configuration names the eligible products, a minimum line
quantity and a percentage. Every cart line holding an eligible product at
or above the minimum quantity becomes a target of a single discount
application. Anything irregular degrades to no discount: pricing must never
block checkout.
"""
import logging
from enum import Enum
from typing import Callable, Dict, Iterable, Optional, Union

from pydantic import ValidationError

from models import (
    Cart, CartLine, CartLineRef, DiscountApplication, DiscountConfiguration,
    DiscountTarget, DiscountValue, FunctionRunResult, Percentage, RunInput,
    VolumeDiscount,
)

logger = logging.getLogger(__name__)

FIRST = "FIRST"


class OutputProtocol(str, Enum):
    CART_LINES = "cart-lines"
    RUN = "run"


def format_number(value: float) -> str:
    """Render a number the way the JSON producer of the config would."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def parse_configuration(blob: Union[str, bytes, None]) -> Optional[DiscountConfiguration]:
    """Parse a metafield blob, or return None when no usable configuration exists."""
    if not blob:
        logger.warning("No metafield configuration found")
        return None

    try:
        return DiscountConfiguration.model_validate_json(blob)
    except ValidationError as e:
        logger.error("Failed to parse metafield: %s", e)
        return None


def evaluate(
    configuration: Optional[DiscountConfiguration], lines: Iterable[CartLine]
) -> Optional[VolumeDiscount]:
    """
    Collect the qualifying cart lines.

    Returns None (no discount) when the configuration is unavailable or no
    line qualifies. Targets keep the order of the cart lines.
    """
    if configuration is None:
        return None

    eligible = frozenset(configuration.products)
    targets = []

    for line in lines:
        product_id = line.productId
        if not product_id:
            continue

        if product_id in eligible and line.quantity >= configuration.minQty:
            targets.append(line.id)

    if not targets:
        return None

    logger.debug("Volume discount applies to %d line(s)", len(targets))
    return VolumeDiscount(
        targets=targets,
        percentOff=configuration.percentOff,
        message=f"Buy {configuration.minQty}, get {format_number(configuration.percentOff)}% off",
    )


def _discounts(decision: Optional[VolumeDiscount]):
    if decision is None:
        return []

    return [
        DiscountApplication(
            targets=[DiscountTarget(cartLine=CartLineRef(id=line_id)) for line_id in decision.targets],
            value=DiscountValue(percentage=Percentage(value=format_number(decision.percentOff))),
            message=decision.message,
        )
    ]


def cart_lines_result(decision: Optional[VolumeDiscount]) -> FunctionRunResult:
    return FunctionRunResult(discounts=_discounts(decision))


def run_result(decision: Optional[VolumeDiscount]) -> FunctionRunResult:
    # Legacy consumers expect the application strategy on every response
    return FunctionRunResult(discountApplicationStrategy=FIRST, discounts=_discounts(decision))


FORMATTERS: Dict[OutputProtocol, Callable[[Optional[VolumeDiscount]], FunctionRunResult]] = {
    OutputProtocol.CART_LINES: cart_lines_result,
    OutputProtocol.RUN: run_result,
}


def format_result(
    decision: Optional[VolumeDiscount], protocol: OutputProtocol = OutputProtocol.CART_LINES
) -> FunctionRunResult:
    return FORMATTERS[OutputProtocol(protocol)](decision)


def run_with_configuration(
    blob: Union[str, bytes, None], cart: Cart, protocol: OutputProtocol = OutputProtocol.CART_LINES
) -> FunctionRunResult:
    configuration = parse_configuration(blob)
    return format_result(evaluate(configuration, cart.lines), protocol)


def run(run_input: RunInput, protocol: OutputProtocol = OutputProtocol.CART_LINES) -> FunctionRunResult:
    return run_with_configuration(run_input.metafieldValue, run_input.cart, protocol)
