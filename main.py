# === main.py ===
import argparse

import uvicorn


def main():
    ap = argparse.ArgumentParser(description="Serve the two-player cribbage table API")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", "-p", type=int, default=8000)
    ap.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    args = ap.parse_args()

    uvicorn.run("CribbageAgent.backend.app:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == '__main__':
    main()
