#!/usr/bin/env python3
"""
CLI for fleet maintenance status.

Commands:
  status       - Per-vehicle summary of item statuses
  vehicle      - Item statuses and service history of one vehicle
  regulations  - List loaded regulations and report overlaps
  snapshot     - Write the classified fleet to a YAML snapshot
"""

import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from fleet import (
    Catalog,
    ConfigError,
    ItemStatus,
    RegulationTable,
    ServiceRecord,
    Status,
    Vehicle,
    build_snapshot,
    cities,
    filter_history,
    filter_vehicles,
    fleet_stats,
    load_config,
    parse_date,
    parse_history_rows,
    parse_schedule_rows,
    read_rows,
    run,
    save_snapshot,
)

logger = logging.getLogger("fleetstatus")

STATUS_LABELS = {
    Status.CRITICAL: "Критично",
    Status.WARNING: "Увага",
    Status.GOOD: "Норма",
    Status.UNKNOWN: "Невідомо",
}

# =============================================================================
# Formatting helpers
# =============================================================================


def format_number(number: Optional[float]) -> str:
    """Round and group thousands with spaces ('90 000')."""
    if number is None:
        return "-"
    return f"{round(number):,}".replace(",", " ")


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{format_number(km)} км"


def format_price(price: Optional[float]) -> str:
    """Format a price with two decimals; blank for missing or zero."""
    if not price:
        return ""
    return f"{price:,.2f}".replace(",", " ")


def format_date(text: Optional[str]) -> str:
    """Format a date as DD.MM.YYYY, raw text when it cannot be parsed."""
    if not text:
        return "-"
    parsed = parse_date(text)
    return parsed.strftime("%d.%m.%Y") if parsed else text


def format_status(status: Optional[Status]) -> str:
    return STATUS_LABELS.get(status, "-") if status else "-"


def truncate(text: Optional[str], max_len: int = 40) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Table helpers
# =============================================================================


def make_fleet_table(vehicles: List[Vehicle]) -> List[List[str]]:
    """One row per vehicle with counts per status."""
    rows = []
    for vehicle in vehicles:
        statuses = vehicle.statuses()
        rows.append(
            [
                vehicle.city or "-",
                vehicle.plate,
                truncate(vehicle.car.model, 30),
                vehicle.car.year or "-",
                format_km(vehicle.current_odometer),
                statuses.count(Status.CRITICAL),
                statuses.count(Status.WARNING),
                statuses.count(Status.GOOD),
            ]
        )
    return rows


def make_item_table(vehicle: Vehicle, catalog: Catalog) -> List[List[str]]:
    """One row per catalog item; never-serviced items show dashes."""
    rows = []
    for item in catalog:
        part: Optional[ItemStatus] = vehicle.get_item(item.name)
        if part is None:
            rows.append([item.label, "-", "-", "-", "-", "-"])
            continue
        rows.append(
            [
                item.label,
                format_status(part.status),
                format_date(part.date),
                format_km(part.odometer),
                format_km(part.distance_since),
                part.time_label,
            ]
        )
    return rows


def make_history_table(records: List[ServiceRecord]) -> List[List[str]]:
    """Convert service records to table rows."""
    return [
        [
            format_date(r.date),
            format_km(r.odometer),
            truncate(r.description),
            r.part_code or "-",
            f"{r.quantity:g} {r.unit}".strip() if r.quantity else "-",
            format_price(r.total_with_vat) or "-",
            r.status or "-",
        ]
        for r in records
    ]


def make_regulation_table(table: RegulationTable) -> List[List[str]]:
    rows = []
    for r in table:
        if r.chain:
            thresholds = "chain"
        else:
            thresholds = f"{format_number(r.warning)} / {format_number(r.critical)}"
        years = f"{r.year_from}-{r.year_to}"
        priority = "-" if r.priority == float("inf") else f"{r.priority:g}"
        rows.append(
            [priority, r.item, r.plate, r.brand, r.model, years, r.period.value, thresholds, r.unit or "-"]
        )
    return rows


# =============================================================================
# Pipeline
# =============================================================================


def load_fleet(args):
    """Read the sheet exports and classify the fleet."""
    config = load_config(args.config)
    cars = parse_schedule_rows(read_rows(args.schedule), config.schedule)
    records = parse_history_rows(read_rows(args.history), cars, config.history)
    regulation_rows = read_rows(args.regulations) if args.regulations else []
    table = RegulationTable.build(regulation_rows, config.catalog)
    vehicles = run(cars, records, config.catalog, table, args.date)
    return config, table, vehicles


# =============================================================================
# Commands
# =============================================================================


def cmd_status(args):
    """Per-vehicle summary of item statuses."""
    config, _, vehicles = load_fleet(args)
    all_vehicles = list(vehicles.values())

    status = Status.from_key(args.status) if args.status else None
    item_status = Status.from_key(args.item_status) if args.item_status else None
    shown = filter_vehicles(
        all_vehicles,
        search=args.search,
        city=args.city,
        status=status,
        item=config.catalog.resolve_name(args.item) if args.item else None,
        item_status=item_status,
    )

    stats = fleet_stats(all_vehicles)
    print(f"Date: {args.date.isoformat()}")
    print(f"Vehicles: {stats['total']}  (critical: {stats['critical']}, "
          f"warning: {stats['warning']}, good: {stats['good']})")
    print(f"Cities: {', '.join(cities(all_vehicles)) or '-'}")
    if len(shown) != len(all_vehicles):
        print(f"Showing: {len(shown)} (filtered)")
    print()

    if not shown:
        print("No vehicles found.")
        return 0

    headers = ["City", "Plate", "Model", "Year", "Odometer", "Critical", "Warning", "Good"]
    print(tabulate(make_fleet_table(shown), headers=headers, tablefmt="simple"))
    return 0


def cmd_vehicle(args):
    """Item statuses and service history of one vehicle."""
    config, _, vehicles = load_fleet(args)
    vehicle = vehicles.get(args.plate)
    if vehicle is None:
        print(f"Error: Unknown vehicle '{args.plate}'")
        return 1

    print(f"Vehicle: {vehicle.car.name}")
    print(f"City: {vehicle.city or '-'}")
    print(f"Odometer: {format_km(vehicle.current_odometer)} (as of {args.date.isoformat()})")
    print()

    headers = ["Item", "Status", "Last done", "At", "Since", "Time"]
    print(tabulate(make_item_table(vehicle, config.catalog), headers=headers, tablefmt="simple"))
    print()

    item = config.catalog.resolve_name(args.item) if args.item else None
    records = filter_history(vehicle.history, config.catalog, item, args.search)
    print(f"History: {len(records)} of {len(vehicle.history)} records")
    if records:
        headers = ["Date", "Odometer", "Description", "Code", "Qty", "Total", "Status"]
        print(tabulate(make_history_table(records), headers=headers, tablefmt="simple"))
    return 0


def cmd_regulations(args):
    """List loaded regulations and report overlaps."""
    config = load_config(args.config)
    if not args.regulations:
        print("Error: --regulations is required for this command")
        return 1
    table = RegulationTable.build(read_rows(args.regulations), config.catalog)

    print(f"Regulations: {len(table)}")
    print()
    if len(table):
        headers = ["Priority", "Item", "Plate", "Brand", "Model", "Years", "Period", "Warn / Crit", "Unit"]
        print(tabulate(make_regulation_table(table), headers=headers, tablefmt="simple"))
        print()

    overlaps = table.find_overlaps()
    if overlaps:
        print(f"OVERLAPPING ({len(overlaps)} pairs, first row wins):")
        for a, b in overlaps:
            print(f"  {a.item}: row {a.row_number} shadows row {b.row_number}")
        return 2 if args.strict else 0
    return 0


def cmd_snapshot(args):
    """Write the classified fleet to a YAML snapshot."""
    _, _, vehicles = load_fleet(args)
    snapshot = build_snapshot(vehicles, datetime.now(), args.date)
    print(f"Writing {len(vehicles)} vehicles to {args.output}")
    if args.dry_run:
        print("(dry run - no changes made)")
        return 0
    save_snapshot(args.output, snapshot)
    print("Snapshot saved.")
    return 0


# =============================================================================
# Main
# =============================================================================


def parse_reference_date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{text}' (expected YYYY-MM-DD)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fleet maintenance status",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --schedule schedule.csv --history history.csv status
  %(prog)s --schedule schedule.csv --history history.csv status --status critical
  %(prog)s --schedule schedule.csv --history history.csv \\
      --regulations regulations.csv vehicle AA1234BB --item "oil change"
  %(prog)s --regulations regulations.csv regulations --strict
  %(prog)s --schedule schedule.csv --history history.csv snapshot fleet.yaml
""",
    )
    parser.add_argument("--schedule", type=Path, help="CSV export of the schedule sheet")
    parser.add_argument("--history", type=Path, help="CSV export of the history sheet")
    parser.add_argument("--regulations", type=Path, help="CSV export of the regulations sheet")
    parser.add_argument("--config", type=Path, help="YAML configuration file")
    parser.add_argument(
        "--date",
        type=parse_reference_date,
        default=date.today(),
        help="Reference date in YYYY-MM-DD format (default: today)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    status_parser = subparsers.add_parser("status", help="Per-vehicle summary")
    status_parser.add_argument("--city", type=str, help="Only vehicles in this city")
    status_parser.add_argument("--search", type=str, help="Text in plate, city or model")
    status_parser.add_argument(
        "--status",
        choices=["critical", "warning", "good", "unknown"],
        help="Only vehicles with at least one item in this status",
    )
    status_parser.add_argument("--item", type=str, help="Only vehicles with this item serviced")
    status_parser.add_argument(
        "--item-status",
        choices=["critical", "warning", "good", "unknown"],
        help="With --item, require the item to be in this status",
    )

    vehicle_parser = subparsers.add_parser("vehicle", help="Details of one vehicle")
    vehicle_parser.add_argument("plate", type=str, help="License plate")
    vehicle_parser.add_argument("--item", type=str, help="Only history records of this item")
    vehicle_parser.add_argument("--search", type=str, help="Text search over history")

    regulations_parser = subparsers.add_parser("regulations", help="List regulations")
    regulations_parser.add_argument(
        "--strict", action="store_true", help="Exit with status 2 when regulations overlap"
    )

    snapshot_parser = subparsers.add_parser("snapshot", help="Write a YAML snapshot")
    snapshot_parser.add_argument("output", type=Path, help="Output YAML file")
    snapshot_parser.add_argument(
        "--dry-run", action="store_true", help="Show what would be written without saving"
    )
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command != "regulations":
        for name in ("schedule", "history"):
            path = getattr(args, name)
            if path is None:
                print(f"Error: --{name} is required for this command")
                return 1
    for name in ("schedule", "history", "regulations", "config"):
        path = getattr(args, name)
        if path is not None and not path.exists():
            print(f"Error: File not found: {path}")
            return 1

    commands = {
        "status": cmd_status,
        "vehicle": cmd_vehicle,
        "regulations": cmd_regulations,
        "snapshot": cmd_snapshot,
    }
    try:
        return commands[args.command](args)
    except ConfigError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
