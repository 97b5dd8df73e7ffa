"""
Command to create the example schema
"""

from dbplayground.interfaces.cli.commands.base import BaseCommand
from dbplayground.services.query_service import QueryService


class Command(BaseCommand):
    description = "Create the example users table and its updated_at trigger"

    def handle(self, **kwargs):
        self.print_info("Initializing database...")
        self.run_with_database(lambda database: QueryService(database).initialize())
        self.print_success("Database initialized successfully")
