"""Entrance, friction and exit losses and the resulting culvert headwater."""

from __future__ import annotations

import math

from loguru import logger

from .classes_references import InvalidInput
from .manning import check_roughness
from .models.flow_state import FlowState, HeadwaterResult

DEFAULT_ENTRANCE_LOSS = 0.5


def headwater(state: FlowState, roughness: float, length: float, entrance_loss: float = DEFAULT_ENTRANCE_LOSS) -> HeadwaterResult:
    """
    Return the losses and headwater depth for a conduit carrying `state`.

    Open channels are assumed to run at equilibrium depth with no inlet or outlet
    transition, so every loss is zero and HW = y + Hv. For closed conduits:

    - He = Ke·Hv
    - Hf = n²·L·V²/Rh^(4/3)
    - Ho = Hv
    - HW = y + Hv + He + Hf + Ho

    Args:
        state: Uniform-flow state produced by `manning.flow_state`.
        roughness: Manning's n of the barrel.
        length: Barrel length L (m).
        entrance_loss: Entrance loss coefficient Ke (typically 0.2 to 0.9).
    """
    if not state.shape.is_closed:
        return open_channel_headwater(state)

    check_roughness(roughness)
    errors: list[str] = []
    if not math.isfinite(length) or length < 0:
        errors.append(f"Conduit length must be >= 0 (got {length}).")
    if not math.isfinite(entrance_loss) or entrance_loss < 0:
        errors.append(f"Entrance loss coefficient must be >= 0 (got {entrance_loss}).")
    if errors:
        raise InvalidInput(errors)

    entrance: float = entrance_loss * state.velocity_head
    friction: float = roughness**2 * length * state.velocity**2 / state.hydraulic_radius ** (4.0 / 3.0)
    exit_: float = state.velocity_head
    total: float = entrance + friction + exit_
    result = HeadwaterResult(
        entrance_loss=entrance,
        friction_loss=friction,
        exit_loss=exit_,
        total_loss=total,
        headwater=state.depth + state.velocity_head + total,
    )
    logger.debug(
        "Headwater for {shape}: He={he:.4f} Hf={hf:.4f} Ho={ho:.4f} HW={hw:.4f}",
        shape=state.shape.value,
        he=entrance,
        hf=friction,
        ho=exit_,
        hw=result.headwater,
    )
    return result


def open_channel_headwater(state: FlowState) -> HeadwaterResult:
    """Specific-energy headwater of an open channel: no losses, HW = y + Hv."""

    return HeadwaterResult(
        entrance_loss=0.0,
        friction_loss=0.0,
        exit_loss=0.0,
        total_loss=0.0,
        headwater=state.depth + state.velocity_head,
    )


__all__: list[str] = ["DEFAULT_ENTRANCE_LOSS", "headwater", "open_channel_headwater"]
