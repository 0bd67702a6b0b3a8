"""Console rendering for launches, company info and fetch state."""

import json
from typing import List, Sequence

from launchboard.models.company import CompanyInfo
from launchboard.models.launch import LaunchRecord
from launchboard.state.fetch_state import Failed, FetchState, Loaded
from launchboard.utils.time import to_utc_z


def describe_state(state: FetchState) -> str:
    """One-line state indicator: idle, loading, loaded: <count>, error: <message>."""
    if isinstance(state, Loaded):
        value = state.value
        if isinstance(value, list):
            return f"{state.label}: {len(value)}"
        return state.label
    if isinstance(state, Failed):
        return f"{state.label}: {state.error}"
    return state.label


def outcome_label(launch: LaunchRecord) -> str:
    # Unknown outcomes render as Failed, same as the list cell always has
    return "Success" if launch.success else "Failed"


def render_launches_text(launches: Sequence[LaunchRecord], filter_name: str) -> str:
    """Render the launch list as aligned rows."""
    lines: List[str] = []
    lines.append(f"Launches ({filter_name}): {len(launches)}")
    lines.append("-" * 72)

    if not launches:
        lines.append("No launches to show.")
        return "\n".join(lines)

    for launch in launches:
        name = launch.name or "(unnamed)"
        date = to_utc_z(launch.date_utc) if launch.date_utc else "date unknown"
        lines.append(f"{name:<36} {date:<26} {outcome_label(launch)}")

    return "\n".join(lines)


def render_launches_json(launches: Sequence[LaunchRecord]) -> str:
    return json.dumps([launch.model_dump(mode="json") for launch in launches], indent=2)


def render_company_summary(info: CompanyInfo) -> str:
    """Summary label for the company header."""
    valuation = f"{info.valuation:,}" if info.valuation is not None else "unknown"
    return (
        f"Company: {info.name or ''}, "
        f"Founder: {info.founder or ''}, "
        f"Valuation: {valuation}"
    )


def render_company_json(info: CompanyInfo) -> str:
    return json.dumps(info.model_dump(mode="json"), indent=2)
