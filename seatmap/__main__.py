from __future__ import annotations

import argparse
import json
import logging

from .hittest import hit_test, pick, seats_in_rect
from .model import ObjectRef, Position, SeatMapError
from .properties import get_properties, rename_category, seat_stats, set_property, set_seat_status
from .render import render_ascii
from .storage import load_scene, save_scene
from .zoom import Zoom


DEFAULT_FILE = "scene.json"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--file",
        default=DEFAULT_FILE,
        help=f"Path to scene JSON file (default: {DEFAULT_FILE})",
    )


def _add_rect_args(p: argparse.ArgumentParser) -> None:
    for name in ("x1", "y1", "x2", "y2"):
        p.add_argument(name, type=float)


def cmd_show(args: argparse.Namespace) -> int:
    scene = load_scene(args.file)
    selected = seats_in_rect(scene, Position.of(*args.select[:2]), Position.of(*args.select[2:])) if args.select else ()
    print(render_ascii(scene, selected=selected, cell_size=args.cell))
    return 0


def cmd_hit(args: argparse.Namespace) -> int:
    scene = load_scene(args.file)
    point = Zoom(args.zoom).to_scene(args.x, args.y)
    candidates = hit_test(scene, point)
    if not candidates:
        print("No object")
        return 1
    previous = ObjectRef.parse(args.after) if args.after else None
    chosen = pick(candidates, previous)
    for ref in candidates:
        marker = "*" if ref == chosen else " "
        print(f"{marker} {ref}")
    return 0


def cmd_select_rect(args: argparse.Namespace) -> int:
    scene = load_scene(args.file)
    ids = seats_in_rect(scene, Position.of(args.x1, args.y1), Position.of(args.x2, args.y2))
    for seat_id in sorted(ids):
        print(seat_id)
    print(f"{len(ids)} seat(s) selected")
    return 0


def cmd_set_status(args: argparse.Namespace) -> int:
    scene = load_scene(args.file)
    ids = seats_in_rect(scene, Position.of(args.x1, args.y1), Position.of(args.x2, args.y2))
    save_scene(set_seat_status(scene, ids, args.status), args.file)
    print(f"Set {len(ids)} seat(s) to {args.status}")
    return 0


def cmd_rename_category(args: argparse.Namespace) -> int:
    scene = load_scene(args.file)
    updated = rename_category(scene, args.old, args.new)
    if updated is scene:
        print("Nothing renamed")
        return 1
    save_scene(updated, args.file)
    print(f"Renamed category {args.old!r} -> {args.new.strip()!r}")
    return 0


def cmd_props(args: argparse.Namespace) -> int:
    scene = load_scene(args.file)
    print(json.dumps(get_properties(scene, ObjectRef.parse(args.ref)), indent=2, sort_keys=True))
    return 0


def cmd_set(args: argparse.Namespace) -> int:
    scene = load_scene(args.file)
    ref = ObjectRef.parse(args.ref)
    updated = set_property(scene, ref, args.name, args.value)
    if updated is scene:
        print(f"{args.name} does not apply to {ref}; unchanged")
        return 0
    save_scene(updated, args.file)
    print(f"Set {args.name}={args.value!r} on {ref}")
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    stats = seat_stats(load_scene(args.file))
    for status, count in stats.items():
        print(f"{status:<12}{count}")
    print(f"{'total':<12}{sum(stats.values())}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="seatmap", description="Venue seat map inspection and editing (CLI).")
    p.add_argument("-v", "--verbose", action="store_true", help="Log engine activity to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_show = sub.add_parser("show", help="Print a character rendering of the scene")
    _add_common_args(p_show)
    p_show.add_argument("--cell", type=float, default=10.0, help="Scene units per character")
    p_show.add_argument("--select", type=float, nargs=4, metavar=("X1", "Y1", "X2", "Y2"),
                        help="Highlight seats inside this rectangle")
    p_show.set_defaults(func=cmd_show)

    p_hit = sub.add_parser("hit", help="List objects under a screen point")
    _add_common_args(p_hit)
    p_hit.add_argument("x", type=float)
    p_hit.add_argument("y", type=float)
    p_hit.add_argument("--zoom", type=float, default=1.0, help="Zoom factor the point was taken at")
    p_hit.add_argument("--after", help="Previously picked object, to cycle to the next one")
    p_hit.set_defaults(func=cmd_hit)

    p_sel = sub.add_parser("select-rect", help="List seats inside a scene rectangle")
    _add_common_args(p_sel)
    _add_rect_args(p_sel)
    p_sel.set_defaults(func=cmd_select_rect)

    p_status = sub.add_parser("set-status", help="Set the status of seats inside a scene rectangle")
    _add_common_args(p_status)
    p_status.add_argument("--status", required=True, choices=["available", "unavailable", "void", "sold"])
    _add_rect_args(p_status)
    p_status.set_defaults(func=cmd_set_status)

    p_rename = sub.add_parser("rename-category", help="Rename a category and the seats using it")
    _add_common_args(p_rename)
    p_rename.add_argument("old")
    p_rename.add_argument("new")
    p_rename.set_defaults(func=cmd_rename_category)

    p_props = sub.add_parser("props", help="Print the properties of an object (e.g. seat:0/1/2, area:0/0)")
    _add_common_args(p_props)
    p_props.add_argument("ref")
    p_props.set_defaults(func=cmd_props)

    p_set = sub.add_parser("set", help="Set one property of an object")
    _add_common_args(p_set)
    p_set.add_argument("ref")
    p_set.add_argument("name")
    p_set.add_argument("value")
    p_set.set_defaults(func=cmd_set)

    p_stats = sub.add_parser("stats", help="Count seats by status")
    _add_common_args(p_stats)
    p_stats.set_defaults(func=cmd_stats)

    return p


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    try:
        return int(args.func(args))
    except SeatMapError as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
