"""
Command to start the HTTP server
"""

import uvicorn

from dbplayground.core.config import get_settings
from dbplayground.interfaces.cli.commands.base import BaseCommand


class Command(BaseCommand):
    description = "Start the HTTP server"

    def add_arguments(self, parser):
        settings = get_settings()
        parser.add_argument('--host', default=settings.HOST, help=f'Bind address (default: {settings.HOST})')
        parser.add_argument('--port', type=int, default=settings.PORT, help=f'Port (default: {settings.PORT})')
        parser.add_argument('--reload', action='store_true', help='Reload on code changes')

    def handle(self, **kwargs):
        host = kwargs['host']
        port = kwargs['port']
        self.print_info(f"Serving on http://{host}:{port}")
        uvicorn.run(
            "dbplayground.main:app",
            host=host,
            port=port,
            reload=kwargs.get('reload', False),
            access_log=True,
            server_header=False,
        )
