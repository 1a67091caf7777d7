"""
Migration Runner
Discovers numbered migration scripts and runs them in order
"""

import os
import re
import importlib.util
from typing import List, Optional, Tuple
from loguru import logger

MIGRATION_PATTERN = re.compile(r'^(\d+)_(\w+)\.py$')


def discover_migrations(directory: str) -> List[Tuple[int, str]]:
    """
    Find migration files named <number>_<name>.py

    Returns:
        (step, path) pairs sorted by step
    """
    migrations = []

    for filename in os.listdir(directory):
        match = MIGRATION_PATTERN.match(filename)
        if match:
            migrations.append((int(match.group(1)), os.path.join(directory, filename)))

    return sorted(migrations)


def load_migration(path: str):
    """Import a migration file by path"""
    module_name = 'migration_' + os.path.splitext(os.path.basename(path))[0]
    spec = importlib.util.spec_from_file_location(module_name, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    if not callable(getattr(module, 'migrate', None)):
        raise ValueError(f"Migration {path} has no migrate(deployer) function")

    return module


def run_migrations(
    deployer,
    directory: str = 'migrations',
    from_step: Optional[int] = None,
    to_step: Optional[int] = None
) -> List[int]:
    """
    Run migrations in step order

    Args:
        deployer: Deployer passed to each migrate()
        directory: Migrations directory
        from_step: First step to run (inclusive)
        to_step: Last step to run (inclusive)

    Returns:
        Steps that were run
    """
    steps_run = []

    for step, path in discover_migrations(directory):
        if from_step is not None and step < from_step:
            continue
        if to_step is not None and step > to_step:
            continue

        logger.info(f"Running migration: {os.path.basename(path)}")

        module = load_migration(path)
        module.migrate(deployer)

        steps_run.append(step)

    if not steps_run:
        logger.warning(f"No migrations to run in {directory}")

    return steps_run
