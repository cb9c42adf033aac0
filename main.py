import argparse
import logging
import sys

from indexwire.domain.exceptions import ConfigurationError


def build_extension_config(database_url=None):
    from indexwire.infrastructure.extension import ExtensionConfig

    if not database_url:
        return ExtensionConfig()

    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker

    engine = create_engine(database_url)
    return ExtensionConfig(orm_session_factory=sessionmaker(bind=engine))


def run_check(config_paths, database_url=None):
    """Resolve the configuration and list every registered service."""
    from indexwire.infrastructure.di import AppInjector

    injector = AppInjector(
        config_paths=config_paths,
        extension_config=build_extension_config(database_url),
    )
    registry = injector.registry
    resolved = injector.resolved

    print(f"Default client: {resolved.default_client}")
    print(f"Default index:  {resolved.default_index}")
    if resolved.loaded_drivers:
        print(f"Drivers:        {', '.join(resolved.loaded_drivers)}")
    print()
    for service_id in sorted(registry.service_ids()):
        print(f"  {service_id}")
    for alias, target in sorted(registry.aliases().items()):
        print(f"  {alias} -> {target}")
    return 0


def run_populate(config_paths, index_name=None, reset=True, database_url=None):
    """Recreate the indexes and feed them from every configured provider."""
    from indexwire.application.use_cases import PopulateUseCase
    from indexwire.infrastructure.di import AppInjector

    injector = AppInjector(
        config_paths=config_paths,
        extension_config=build_extension_config(database_url),
    )

    def report(done, total):
        print(f"  {done}/{total}", end="\r", flush=True)

    try:
        result = injector.get(PopulateUseCase).execute(
            index_name=index_name,
            reset=reset,
            progress=report,
        )
    finally:
        injector.close()

    print()
    for provider_id, count in result.counts.items():
        print(f"{provider_id}: {count} objects")
    print(f"Populated {len(result.indexes)} indexes, {result.total_indexed} objects")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description="indexwire - search index wiring",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --config search.yaml check
  python main.py --config search.yaml --config local.yaml check
  python main.py --config search.yaml populate --index products
        """
    )

    parser.add_argument(
        "--config",
        action="append",
        required=True,
        help="YAML or JSON configuration file (repeatable, later files win)"
    )

    parser.add_argument(
        "--database-url",
        type=str,
        default=None,
        help="SQLAlchemy database URL used by the orm driver"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default="info",
        help="Log level (default: info)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="Resolve the configuration and list services")

    populate = subparsers.add_parser("populate", help="Populate indexes from providers")
    populate.add_argument("--index", type=str, default=None, help="Only this index")
    populate.add_argument(
        "--no-reset",
        action="store_true",
        help="Keep existing indexes instead of recreating them"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        if args.command == "check":
            exit_code = run_check(args.config, database_url=args.database_url)
        elif args.command == "populate":
            exit_code = run_populate(
                args.config,
                index_name=args.index,
                reset=not args.no_reset,
                database_url=args.database_url,
            )
        else:
            parser.print_help()
            exit_code = 1
    except ConfigurationError as err:
        logging.error("Invalid configuration: %s", err)
        exit_code = 2

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
