#!/usr/bin/env python3
"""
Web server for AssetGen - generates visual assets from text descriptions.
Serves the REST API that saves generated images to local disk.
"""

import logging

from rich.console import Console

from assetgen.config import Settings, load_stored_config, resolve_storage_path
from assetgen.server import create_app

settings = Settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
stored_config = load_stored_config(settings.config_path)
app = create_app(settings, stored_config)


if __name__ == '__main__':
    console = Console()
    storage_path = resolve_storage_path(settings, stored_config)
    console.print("[bold green]Starting AssetGen Web Server...[/bold green]")
    console.print(f"Asset storage path: [cyan]{storage_path.absolute()}[/cyan]")
    console.print(f"Default provider: [cyan]{stored_config.default_provider}[/cyan]")
    console.print(
        f"API available at: [cyan]http://localhost:{settings.port}/api/generate[/cyan]"
    )
    console.rule()

    app.run(
        host=settings.host,
        port=settings.port,
        debug=settings.debug,
        threaded=True,
    )
