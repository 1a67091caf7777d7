"""
Contract Deployment Entry Point
Runs the numbered migrations against a configured network
"""

import sys
import argparse
from loguru import logger
from web3.exceptions import Web3Exception
from dotenv import load_dotenv

from blockchain import Deployer, DeploymentError, get_network, load_network_config, run_migrations
from blockchain.network_config import DEFAULT_CONFIG_PATH, get_build_dir


def configure_logging():
    """Console at INFO, rotating file at DEBUG"""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>",
        level="INFO"
    )
    logger.add(
        "data/logs/deploy.log",
        rotation="1 day",
        retention="7 days",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}",
        level="DEBUG"
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Deploy contracts via numbered migrations")
    parser.add_argument('--network', default='test', help="Network profile name")
    parser.add_argument('--config', default=DEFAULT_CONFIG_PATH, help="Network config file")
    parser.add_argument('--migrations-dir', default='migrations')
    parser.add_argument('--build-dir', default=None, help="Compiled artifact directory")
    parser.add_argument('--dry-run', action='store_true', help="Simulate without broadcasting")
    parser.add_argument('-f', '--from', dest='from_step', type=int, default=None)
    parser.add_argument('--to', dest='to_step', type=int, default=None)
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run migrations, return process exit code"""
    load_dotenv()
    args = parse_args(argv)

    logger.info("=" * 70)
    logger.info(f"Contract Deployment ({args.network})")
    logger.info("=" * 70)

    try:
        config = load_network_config(args.config)
        profile = get_network(args.network, config)
        build_dir = args.build_dir or get_build_dir(config)

        provider = profile.make_provider()

        if not provider.is_connected():
            logger.error(f"Failed to connect to {profile.rpc_url}")
            return 1

        deployer = Deployer(provider, profile, build_dir, dry_run_only=args.dry_run)

        steps = run_migrations(
            deployer,
            args.migrations_dir,
            from_step=args.from_step,
            to_step=args.to_step
        )

    except (ValueError, FileNotFoundError, DeploymentError, Web3Exception) as e:
        logger.error(f"Deployment failed: {e}")
        return 1

    logger.info(f"Migrations run: {steps}")

    for name, contract in deployer.deployed.items():
        logger.info(f"  {name}: {contract.address}")

    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(main())
