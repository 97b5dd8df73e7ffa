"""
Command to print the table catalog
"""

from dbplayground.interfaces.cli.commands.base import BaseCommand
from dbplayground.services.table_service import TableService


class Command(BaseCommand):
    description = "List tables and their columns"

    def add_arguments(self, parser):
        parser.add_argument('table', nargs='?', help='Only show this table')

    def handle(self, **kwargs):
        wanted = kwargs.get('table')
        tables = self.run_with_database(lambda database: TableService(database).list_tables())

        if wanted:
            tables = [table for table in tables if table["table_name"] == wanted]
        if not tables:
            self.print_warning("No tables found.")
            return

        for table in sorted(tables, key=lambda t: t["table_name"]):
            print(table["table_name"])
            for column in table["columns"]:
                print(f"  {column['name']:<30} {column['type']}")
