"""Output formatters for rendered forecast nodes."""

import json
import re

from weatherdesk.render.dispatcher import BlockSlot, PresentationNode, ReadingBlock
from weatherdesk.state.reducer import ForecastState, Phase

_TAG_RE = re.compile(r"<[^>]+>")


def markup_to_text(markup: str) -> str:
    """Plain-text version of a tooltip summary from the weather feed."""
    text = (
        markup.replace("&deg;", "°")
        .replace("<br/>", "")
        .replace(". ", ".\n")
        .replace("minus ", "-")
        .replace("plus ", "")
    )
    return _TAG_RE.sub("", text).strip()


def format_status_line(state: ForecastState) -> str:
    phase = state.phase
    if phase == Phase.LOADING:
        return "Fetching forecast..."
    if phase == Phase.FAILED:
        return f"Error: {state.error}"
    if state.last_refreshed is not None:
        local = state.last_refreshed.astimezone()
        return f"Loaded weather at {local:%Y-%m-%d %H:%M:%S}"
    return ""


def format_node_text(node: PresentationNode, verbose: bool = False) -> str:
    """One line per node; tooltips indented below it when verbose."""
    if node.blocks:
        readings = " | ".join(_format_block(b) for b in node.blocks)
        line = f"{node.label}: {readings}"
    else:
        line = f"! {node.label}"

    if not verbose:
        return line

    lines = [line]
    tooltips = [node.tooltip] if node.tooltip else []
    tooltips.extend(b.tooltip for b in node.blocks if b.tooltip)
    for tip in tooltips:
        for tip_line in markup_to_text(tip).splitlines():
            lines.append(f"    {tip_line}")
    return "\n".join(lines)


def _format_block(block: ReadingBlock) -> str:
    reading = f"{block.temperature} {block.description}".rstrip()
    if block.slot == BlockSlot.NOW:
        return reading
    return f"{block.slot.value}: {reading}"


def format_forecast_text(
    state: ForecastState, nodes: list[PresentationNode], verbose: bool = False
) -> str:
    lines = [format_node_text(n, verbose) for n in nodes]
    if not nodes and state.phase == Phase.LOADING:
        lines.append("Loading...")
    status = format_status_line(state)
    if status:
        lines.append(status)
    return "\n".join(lines)


def format_forecast_json(state: ForecastState, nodes: list[PresentationNode]) -> str:
    """JSON rendering for programmatic consumption."""
    data = {
        "phase": state.phase.value,
        "error": state.error,
        "last_refreshed": (
            state.last_refreshed.isoformat() if state.last_refreshed else None
        ),
        "entries": [
            {
                "kind": n.kind.value,
                "label": n.label,
                "tooltip": n.tooltip,
                "blocks": [
                    {
                        "slot": b.slot.value,
                        "temperature": b.temperature,
                        "description": b.description,
                        "tooltip": b.tooltip,
                    }
                    for b in n.blocks
                ],
            }
            for n in nodes
        ],
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
