import argparse
import logging
import os
from typing import Callable, Dict, List, Mapping, Optional

from users_aggregate import (
    calculate_users_average_age,
    count_users_by_country,
    count_users_by_region,
    filter_users_by_minimum_age,
    get_top_n_oldest_users,
)
from users_csv import UserRecord, load_users

DEFAULT_CSV = "users.csv"


def _print_counts(counts: Mapping[str, int]) -> None:
    for key, n in counts.items():
        print(f"  {key}: {n}")


def _describe(user: UserRecord) -> str:
    return f"{user.name} ({user.age})"


def do_summary(users: List[UserRecord], args: argparse.Namespace) -> None:
    filtered = filter_users_by_minimum_age(users, args.min_age)
    by_country = count_users_by_country(users)
    avg_age = calculate_users_average_age(users)
    oldest = get_top_n_oldest_users(users, args.top)
    by_region = count_users_by_region(users)

    print(f"Total users: {len(users)}")
    print(f"Filtered count: {len(filtered)}")
    print("Users per country:")
    _print_counts(by_country)
    print(f"Average age: {avg_age}")
    print(f"Top {args.top} oldest users:")
    for u in oldest:
        print(f"  {_describe(u)}")
    print("Users per region:")
    _print_counts(by_region)


def do_filter(users: List[UserRecord], args: argparse.Namespace) -> None:
    print(f"Filtered count: {len(filter_users_by_minimum_age(users, args.min_age))}")


def do_group(users: List[UserRecord], args: argparse.Namespace) -> None:
    print("Users per country:")
    _print_counts(count_users_by_country(users))


def do_avg(users: List[UserRecord], args: argparse.Namespace) -> None:
    print(f"Average age: {calculate_users_average_age(users)}")


def do_top(users: List[UserRecord], args: argparse.Namespace) -> None:
    for u in get_top_n_oldest_users(users, args.top):
        print(_describe(u))


def do_region(users: List[UserRecord], args: argparse.Namespace) -> None:
    print("Users per region:")
    _print_counts(count_users_by_region(users))


OPERATIONS: Dict[str, Callable[[List[UserRecord], argparse.Namespace], None]] = {
    "summary": do_summary,
    "filter": do_filter,
    "group": do_group,
    "avg": do_avg,
    "top": do_top,
    "region": do_region,
}


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description=(
            "Report on a users CSV with name,age,country columns. "
            f"Operations: {'|'.join(OPERATIONS)}."
        )
    )
    parser.add_argument(
        "operation",
        nargs="?",
        default=None,
        help=f"Report to print: {', '.join(OPERATIONS)} (default: summary).",
    )
    parser.add_argument(
        "--csv",
        default=os.getenv("USERS_CSV", DEFAULT_CSV),
        help=f"Input CSV path (default: $USERS_CSV or {DEFAULT_CSV} in the working directory).",
    )
    parser.add_argument(
        "--min-age",
        type=int,
        default=30,
        help="Minimum age counted by the filter report.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=3,
        help="Number of oldest users listed.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log progress to stderr.")

    # Unrecognized tokens (e.g. "-avg") are not argparse errors: the first one is
    # taken as the operation name, anything after the operation is ignored.
    args, extra = parser.parse_known_args(argv)
    operation = args.operation
    if operation is None:
        operation = extra[0] if extra else "summary"

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(message)s",
    )

    users = load_users(args.csv)
    if not users:
        return

    handler = OPERATIONS.get(operation)
    if handler is None:
        print(f"Unknown operation '{operation}'. Use {'|'.join(OPERATIONS)}.")
        return

    handler(users, args)


if __name__ == "__main__":
    main()
