"""Backend entrypoint: starts uvicorn on the port given by LEAGUE_PORT."""
import os
import uvicorn

from league.main import app


def main() -> None:
    port = int(os.environ.get("LEAGUE_PORT", "8001"))
    host = os.environ.get("LEAGUE_HOST", "127.0.0.1")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
