"""
Base class for all CLI commands
"""

import argparse
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, List, TypeVar

from dbplayground.core.config import get_settings
from dbplayground.infrastructure.db.connection import DatabaseManager

T = TypeVar("T")


class BaseCommand(ABC):
    """Base class for all commands"""

    description = "No description provided"

    def __init__(self):
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            description=self.description,
            add_help=False
        )
        self.add_arguments(parser)
        return parser

    def add_arguments(self, parser: argparse.ArgumentParser):
        """Override to add command-specific arguments"""
        pass

    @abstractmethod
    def handle(self, **kwargs: Any):
        pass

    def run(self, args: List[str]):
        parsed_args = self.parser.parse_args(args)
        self.handle(**vars(parsed_args))

    def help(self):
        self.parser.print_help()

    def run_with_database(self, action: Callable[[DatabaseManager], Awaitable[T]]) -> T:
        """Run ``action`` against a fresh database manager and dispose of it afterwards."""
        async def runner() -> T:
            database = DatabaseManager(get_settings().database)
            try:
                return await action(database)
            finally:
                await database.disconnect()

        return asyncio.run(runner())

    def print_success(self, message: str):
        print(f"\033[92m✓ {message}\033[0m")

    def print_error(self, message: str):
        print(f"\033[91m✗ {message}\033[0m")

    def print_warning(self, message: str):
        print(f"\033[93m⚠ {message}\033[0m")

    def print_info(self, message: str):
        print(f"\033[94mℹ {message}\033[0m")
