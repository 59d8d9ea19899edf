import uvicorn
from dotenv import load_dotenv

load_dotenv()

from server import server  # noqa: E402

server_app = server.handler


def main() -> None:
    """Run the API with uvicorn (development entry point)."""
    uvicorn.run("main:server_app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
