#!/usr/bin/env python3
"""
Management CLI.
Entry point for every command in the ``commands`` package.
"""

import argparse
import importlib
import pkgutil
import sys
from typing import Dict, List, Optional, Type

from dbplayground.core.exceptions import AppException
from dbplayground.interfaces.cli import commands as commands_package
from dbplayground.interfaces.cli.commands.base import BaseCommand


class CLIManager:
    def __init__(self):
        self.available_commands = self._discover_commands()

    def _discover_commands(self) -> Dict[str, Type[BaseCommand]]:
        """Find every module in ``commands`` that defines a ``Command`` class"""
        commands: Dict[str, Type[BaseCommand]] = {}

        for module_info in pkgutil.iter_modules(commands_package.__path__):
            if module_info.name.startswith("_") or module_info.name == "base":
                continue
            module = importlib.import_module(f"{commands_package.__name__}.{module_info.name}")
            command_class = getattr(module, "Command", None)
            if command_class is not None:
                commands[module_info.name] = command_class

        return commands

    def list_commands(self):
        print("Available commands:")
        print("=" * 40)

        if not self.available_commands:
            print("No commands found.")
            return

        for name, command_class in sorted(self.available_commands.items()):
            print(f"  {name:<20} {command_class.description}")

    def run_command(self, command_name: str, args: List[str]) -> int:
        if command_name not in self.available_commands:
            print(f"Unknown command: {command_name}")
            print("Use 'python manage.py help' to see available commands.")
            return 1

        command_instance = self.available_commands[command_name]()

        try:
            command_instance.run(args)
        except AppException as e:
            command_instance.print_error(e.message)
            if e.details:
                command_instance.print_error(str(e.details))
            return 1
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Database playground management tool",
        add_help=False
    )
    parser.add_argument('command', nargs='?', help='Command to run')
    parser.add_argument('args', nargs=argparse.REMAINDER, help='Arguments for the command')

    args = parser.parse_args(argv)
    cli_manager = CLIManager()

    if not args.command or args.command == 'help':
        if args.args:
            command_name = args.args[0]
            if command_name in cli_manager.available_commands:
                cli_manager.available_commands[command_name]().help()
            else:
                print(f"Unknown command: {command_name}")
        else:
            print("Usage: python manage.py <command> [args...]")
            print()
            cli_manager.list_commands()
            print()
            print("Use 'python manage.py help <command>' for help on a specific command.")
        return 0

    return cli_manager.run_command(args.command, args.args)


if __name__ == "__main__":
    sys.exit(main())
