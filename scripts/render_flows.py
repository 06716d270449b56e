#!/usr/bin/env python3
"""Batch render all diagram .json files in the repository to SVG.

Outputs go to /tmp/paxflow_renders/.

Usage:
    python scripts/render_flows.py [--input-dir DIR] [--output-dir DIR]
"""

from __future__ import annotations

import argparse
import json
import sys
import warnings
from datetime import datetime
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from paxflow.layout.config import LayoutConfig  # noqa: E402
from paxflow.layout.engine import compute_layout  # noqa: E402
from paxflow.layout.timeaxis import (  # noqa: E402
    EdgeLoad,
    compute_trip_layout,
    compute_vertical_trip_layout,
)
from paxflow.model import (  # noqa: E402
    LinkSpec,
    NodeSpec,
    RealId,
    SentinelId,
    SentinelTag,
)
from paxflow.render.svg import (  # noqa: E402
    render_flow_svg,
    render_trip_svg,
    render_vertical_trip_svg,
)
from paxflow.trips import GroupCount, Stop, TripSection, assemble_trip_flows  # noqa: E402

OUTPUT_DIR = Path("/tmp/paxflow_renders")
INPUT_DIR = project_root / "examples"


def _node_id(raw):
    """Endpoint ids are plain keys, or {"sentinel": tag} for sentinels."""
    if isinstance(raw, dict):
        return SentinelId(SentinelTag(raw["sentinel"]))
    return RealId(raw)


def _node(raw: dict) -> NodeSpec:
    return NodeSpec(
        id=RealId(raw["id"]),
        display_time=raw["time"],
        occupancy=raw["occupancy"],
        capacity=raw["capacity"],
        name=raw.get("name", ""),
    )


def render_flow(doc: dict) -> str:
    config = LayoutConfig(**doc.get("config", {}))
    layout = compute_layout(
        [_node(n) for n in doc.get("source_nodes", [])],
        [_node(n) for n in doc.get("target_nodes", [])],
        [
            LinkSpec(
                id=link["id"],
                from_node=_node_id(link["from"]),
                to_node=_node_id(link["to"]),
                value=link["value"],
            )
            for link in doc.get("links", [])
        ],
        config,
    )
    return render_flow_svg(layout, width=doc.get("width", 600))


def _edges(doc: dict) -> list[EdgeLoad]:
    return [
        EdgeLoad(
            id=e["id"],
            from_name=e["from"],
            to_name=e["to"],
            departure=datetime.fromisoformat(e["departure"]),
            arrival=datetime.fromisoformat(e["arrival"]),
            capacity=e["capacity"],
            occupancy=e["occupancy"],
            floor=e.get("floor"),
        )
        for e in doc["edges"]
    ]


def render_trip(doc: dict) -> str:
    config = LayoutConfig.time_axis(**doc.get("config", {}))
    edges = _edges(doc)
    width, height = doc.get("width", 1200), doc.get("height", 120)
    layouts = compute_trip_layout(edges, width, height, config)
    return render_trip_svg(layouts, width, height, label=doc.get("title", ""))


def render_vertical(doc: dict) -> str:
    layout = compute_vertical_trip_layout(_edges(doc))
    return render_vertical_trip_svg(layout, width=doc.get("width", 580))


def _stop(raw: dict) -> Stop:
    return Stop(
        station=raw["station"], name=raw.get("name", ""), schedule_time=raw["time"]
    )


def _groups(raw: list) -> tuple[GroupCount, ...]:
    return tuple(GroupCount(group=g["group"], passengers=g["passengers"]) for g in raw)


def render_trip_graph(doc: dict) -> str:
    flows = assemble_trip_flows(
        [
            TripSection(
                departure_stop=_stop(s["from"]),
                arrival_stop=_stop(s["to"]),
                entering=_groups(s.get("entering", [])),
                exiting=_groups(s.get("exiting", [])),
            )
            for s in doc["sections"]
        ]
    )
    config = LayoutConfig(**doc.get("config", {}))
    layout = compute_layout(
        flows.source_nodes, flows.target_nodes, flows.links, config
    )
    return render_flow_svg(layout, width=doc.get("width", 600))


RENDERERS = {
    "flow": render_flow,
    "trip": render_trip,
    "vertical": render_vertical,
    "trip_graph": render_trip_graph,
}


def render_file(json_path: Path, output_dir: Path) -> tuple[str, list[str]]:
    """Load, layout, and render a .json diagram to SVG.

    Returns (name, list_of_issues). Warnings raised during layout (dropped
    links, skipped records) are reported as issues.
    """
    name = json_path.stem
    issues: list[str] = []

    try:
        doc = json.loads(json_path.read_text())
        renderer = RENDERERS[doc.get("kind", "flow")]
    except (OSError, ValueError, KeyError) as e:
        return name, [f"PARSE ERROR: {e}"]

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            svg_str = renderer(doc)
        except (KeyError, TypeError, ValueError) as e:
            return name, [f"LAYOUT ERROR: {e}"]
    issues.extend(str(w.message) for w in caught)

    (output_dir / f"{name}.svg").write_text(svg_str)
    return name, issues


def main():
    parser = argparse.ArgumentParser(description="Batch render diagram .json files")
    parser.add_argument("--input-dir", type=Path, default=INPUT_DIR)
    parser.add_argument("--output-dir", type=Path, default=OUTPUT_DIR)
    args = parser.parse_args()

    args.output_dir.mkdir(parents=True, exist_ok=True)

    all_files = sorted(args.input_dir.glob("*.json"))
    print(f"Rendering {len(all_files)} files to {args.output_dir}/")
    print()

    max_name_len = max((len(f.stem) for f in all_files), default=0)
    any_errors = False

    for json_path in all_files:
        name, issues = render_file(json_path, args.output_dir)
        status = "OK" if not issues else "ISSUES"
        if any("ERROR" in i for i in issues):
            status = "FAIL"
            any_errors = True

        print(f"  {name:<{max_name_len}}  [{status}]")
        for issue in issues:
            print(f"    - {issue}")

    print(f"\nOutputs in: {args.output_dir}/")

    if any_errors:
        sys.exit(1)


if __name__ == "__main__":
    main()
