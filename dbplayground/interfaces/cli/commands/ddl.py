"""
Command to render a CREATE TABLE statement from a JSON definition
"""

import json
from pathlib import Path

from pydantic import ValidationError

from dbplayground.infrastructure.db.ddl import build_create_table
from dbplayground.interfaces.cli.commands.base import BaseCommand
from dbplayground.schemas.tables import CreateTableRequest


class Command(BaseCommand):
    description = "Print the CREATE TABLE statement for a {tableName, columns} JSON file"

    def add_arguments(self, parser):
        parser.add_argument('path', help='JSON file with tableName and columns')

    def handle(self, **kwargs):
        path = Path(kwargs['path'])
        try:
            request = CreateTableRequest.model_validate(json.loads(path.read_text(encoding="utf-8")))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            self.print_error(f"Could not read table definition from {path}: {e}")
            raise SystemExit(1)

        print(build_create_table(request.table_name, request.columns))
