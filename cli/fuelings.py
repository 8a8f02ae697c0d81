#!/usr/bin/env python3

from cli.users import add_user_argument
from logger import get_logger

logger = get_logger()


def _log_fueling(fueling):
    logger.info(f"ID: {fueling.id}")
    logger.info(f"When: {fueling.timestamp.isoformat()}")
    logger.info(f"Cost: {fueling.cost:.2f}")
    logger.info(f"Fuel type: {fueling.fuel_type}")
    if fueling.location:
        logger.info(f"Location: {fueling.location}")
    if fueling.car_km is not None:
        logger.info(f"Odometer: {fueling.car_km:.1f} km")


def cmd_list(args, services):
    """List the user's fueling records."""
    fuelings = services.fuelings.find_by_user(args.user_id)

    if not fuelings:
        logger.info("No fueling records found.")
        return

    logger.info("\nFueling records:")
    logger.info("=" * 80)
    for fueling in fuelings:
        _log_fueling(fueling)
        logger.info("-" * 80)

    logger.info(f"\nTotal records: {len(fuelings)}")


def cmd_create(args, services):
    """Record a refuel."""
    fueling = services.fuelings.create(
        args.user_id,
        cost=args.cost,
        fuel_type=args.fuel_type,
        timestamp=args.timestamp,
        location=args.location,
        car_km=args.car_km,
    )
    logger.info("\n✓ Fueling record created")
    _log_fueling(fueling)


def cmd_update(args, services):
    """Update selected fields of a fueling record."""
    changes = {
        field: getattr(args, field)
        for field in ("cost", "fuel_type", "location", "car_km", "timestamp")
        if getattr(args, field) is not None
    }
    fueling = services.fuelings.update(args.user_id, args.fueling_id, changes)
    logger.info("\n✓ Fueling record updated")
    _log_fueling(fueling)


def cmd_delete(args, services):
    """Delete a fueling record by ID."""
    services.fuelings.delete(args.user_id, args.fueling_id)
    logger.info(f"✓ Fueling record {args.fueling_id} deleted successfully.")


def _add_field_arguments(parser, required):
    parser.add_argument("--cost", type=float, required=required)
    parser.add_argument("--fuel-type", dest="fuel_type", required=required)
    parser.add_argument(
        "--timestamp", required=required, help="When the refuel happened, ISO-8601"
    )
    parser.add_argument("--location")
    parser.add_argument(
        "--car-km", dest="car_km", type=float, help="Odometer reading"
    )


def setup_parser(subparsers):
    """Setup fuelings subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "fuelings",
        help="Manage fueling records",
        description="Create, list, update, and delete a user's fueling records",
    )

    fuelings_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available fueling commands",
        dest="subcommand",
        required=True,
    )

    list_parser = fuelings_subparsers.add_parser(
        "list", help="List the user's fueling records"
    )
    add_user_argument(list_parser)
    list_parser.set_defaults(func=cmd_list)

    create_parser = fuelings_subparsers.add_parser(
        "create", help="Record a refuel"
    )
    add_user_argument(create_parser)
    _add_field_arguments(create_parser, required=True)
    create_parser.set_defaults(func=cmd_create)

    update_parser = fuelings_subparsers.add_parser(
        "update", help="Change fields of a fueling record"
    )
    add_user_argument(update_parser)
    update_parser.add_argument("fueling_id", type=int)
    _add_field_arguments(update_parser, required=False)
    update_parser.set_defaults(func=cmd_update)

    delete_parser = fuelings_subparsers.add_parser(
        "delete", help="Delete a fueling record by ID"
    )
    add_user_argument(delete_parser)
    delete_parser.add_argument("fueling_id", type=int)
    delete_parser.set_defaults(func=cmd_delete)
