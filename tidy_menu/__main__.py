"""Point d'entrée ``python -m tidy_menu`` : lance l'API avec uvicorn."""
from __future__ import annotations

import argparse

import uvicorn


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Lance l'API de personnalisation du menu")
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port sur lequel exposer l'API (défaut: 8000)",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Adresse d'écoute d'uvicorn (défaut: 127.0.0.1)",
    )
    parser.add_argument("--reload", action="store_true", help="Recharge automatique en développement")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    # Logging is configured by the application module itself.
    uvicorn.run("tidy_menu.app:app", host=args.host, port=args.port, reload=args.reload, log_config=None)
    return 0


if __name__ == "__main__":  # pragma: no cover - point d'entrée standard
    raise SystemExit(main())
