"""
Dye garden configurator — entry point.

Usage:
    python -m dyegarden serve                    # start web server on :8000
    python -m dyegarden serve --port 3000
    python -m dyegarden summary <share-url>      # plant counts for a shared garden
"""

import logging
import sys

from dyegarden.config import Settings


def _summary(link: str) -> int:
    from dyegarden.session import GardenSession
    from dyegarden.share import MemoryLocation

    fragment = link.split("#", 1)[1] if "#" in link else link
    if not fragment.startswith("state="):
        fragment = f"state={fragment}"
    sess = GardenSession(location=MemoryLocation(fragment))
    sess.load_catalog()
    sess.restore()

    print(f"Garden: {sess.grid.columns} x {sess.grid.rows} m²")
    summary = sess.summary()
    if not summary:
        print("No plants placed.")
        return 0
    for name, line in summary.items():
        print(f"  {line.count:>4}  {name}")
    return 0


def main():
    settings = Settings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    args = sys.argv[1:]
    cmd = args[0] if args else "serve"

    if cmd == "serve":
        port = 8000
        host = "127.0.0.1"
        for i, a in enumerate(args):
            if a == "--port" and i + 1 < len(args):
                port = int(args[i + 1])
            elif a == "--host" and i + 1 < len(args):
                host = args[i + 1]

        from dyegarden.web.server import main as serve
        serve(host=host, port=port)
    elif cmd == "summary" and len(args) == 2:
        sys.exit(_summary(args[1]))
    else:
        print(f"Unknown command: {' '.join(args)}")
        print("Usage: python -m dyegarden serve [--port PORT] [--host HOST]")
        print("       python -m dyegarden summary <share-url>")
        sys.exit(1)


if __name__ == "__main__":
    main()
