"""WSGI entry point."""

import os

from portal import create_app

app = create_app(os.environ.get("FLASK_ENV", "production"))


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=5000)
