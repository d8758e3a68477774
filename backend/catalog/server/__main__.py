"""Run the catalog server: python -m catalog.server"""

import uvicorn

from catalog.server.settings import CatalogServerSettings


def main() -> None:
    settings = CatalogServerSettings()
    # lifespan="on" makes a failed catalog initialization abort startup
    uvicorn.run(
        "catalog.server.app:get_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_config=None,
    )


if __name__ == "__main__":
    main()
