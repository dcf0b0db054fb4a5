import argparse
import json
from typing import Optional

import yaml

from catalog import Catalog
from config import YamlConfig
from logger_setup import setup_logger
from planner_service import PlannerService
from persistence import PersistenceError
from schedule import DAY_NAMES
from seed_sample_data import seed
from settings_schema import load_settings, validate_settings


def _open(data_path: str) -> PlannerService:
    service = PlannerService(catalog=Catalog())
    service.load(data_path)
    return service


def _day_index(value: str) -> int:
    """Accept a weekday index (0-6) or a weekday name."""
    for idx, name in enumerate(DAY_NAMES):
        if value.lower() == name.lower():
            return idx
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"unknown day: {value}")


def demo_data(data_path: str) -> None:
    """Populate the data file with a sample week if it is empty."""
    service = _open(data_path)
    if not seed(service):
        print("Planner already contains data")
        return
    service.save(data_path)
    print("Demo data inserted")


def print_summary(data_path: str) -> None:
    service = _open(data_path)
    print(service.week_summary())


def print_metrics(
    data_path: str, include_empty: bool = False, day: Optional[int] = None
) -> None:
    service = _open(data_path)
    if day is not None:
        print(json.dumps(service.day_breakdown(day), indent=2))
        return
    report = {
        "equipment": service.equipment_metrics(include_empty),
        "muscles": service.muscle_metrics(include_empty),
        "muscle_groups": service.muscle_group_metrics(include_empty),
    }
    print(json.dumps(report, indent=2))


def update_settings(settings_path: Optional[str], assignments: list) -> None:
    """Apply ``key=value`` pairs to the settings file after validating them."""
    cfg = YamlConfig(settings_path)
    data = cfg.load()
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise ValueError(f"expected key=value: {item}")
        data[key] = yaml.safe_load(value) if value else None
    validate_settings(data)
    cfg.save(data)
    print(f"settings saved to {cfg.path}")


def schedule_day(data_path: str, day: int, workout: str) -> None:
    service = _open(data_path)
    service.schedule_workout(day, workout)
    service.save(data_path)
    print(f"{DAY_NAMES[day]}: {workout}")


def clear_day(data_path: str, day: int) -> None:
    service = _open(data_path)
    service.clear_day(day)
    service.save(data_path)
    print(f"{DAY_NAMES[day]} cleared")


def main(argv: Optional[list] = None) -> None:
    parser = argparse.ArgumentParser(description="Weekly workout planner")
    parser.add_argument("--settings", default=None)
    parser.add_argument("--data", default=None)
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("demo")
    sub.add_parser("summary")

    met = sub.add_parser("metrics")
    met.add_argument("--all", action="store_true", dest="include_empty")
    met.add_argument("--day", type=_day_index, default=None)

    sch = sub.add_parser("schedule")
    sch.add_argument("--day", type=_day_index, required=True)
    sch.add_argument("--workout", required=True)

    clr = sub.add_parser("clear")
    clr.add_argument("--day", type=_day_index, required=True)

    cfg = sub.add_parser("config")
    cfg.add_argument("--set", action="append", dest="assignments", required=True)

    args = parser.parse_args(argv)

    try:
        if args.cmd == "config":
            update_settings(args.settings, args.assignments)
            return
        settings = load_settings(args.settings)
        setup_logger(settings.log_level, settings.log_file)
        data_path = args.data or settings.data_path

        if args.cmd == "demo":
            demo_data(data_path)
        elif args.cmd == "summary":
            print_summary(data_path)
        elif args.cmd == "metrics":
            print_metrics(data_path, args.include_empty, args.day)
        elif args.cmd == "schedule":
            schedule_day(data_path, args.day, args.workout)
        elif args.cmd == "clear":
            clear_day(data_path, args.day)
    except (ValueError, PersistenceError, yaml.YAMLError) as e:
        parser.error(str(e))


if __name__ == "__main__":
    main()
