"""Punto de entrada de la app Kivy."""

from __future__ import annotations

import sys

from hr_dashboard.app import run_app


def main() -> int:
    """Run app entrypoint."""
    data_path = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        return run_app(data_path)
    except ImportError as exc:
        print(f"No se pudo iniciar Kivy: {exc}")
        print("Instala dependencias de GUI: pip install kivy")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
