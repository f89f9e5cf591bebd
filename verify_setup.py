"""
Check that this machine can run the liturgy DOCX service.

    python verify_setup.py

Exits non-zero when any check fails.
"""
import asyncio
import importlib.util
import sys
from typing import Callable, List, Tuple

REQUIRED_MODULES = ("fastapi", "uvicorn", "pydantic", "pydantic_settings", "docx")

Check = Tuple[bool, str]


def check_python() -> Check:
    version = "%d.%d.%d" % sys.version_info[:3]
    return sys.version_info >= (3, 10), f"Python {version} (3.10+ required)"


def check_modules() -> Check:
    missing = [name for name in REQUIRED_MODULES if importlib.util.find_spec(name) is None]
    if missing:
        return False, "missing packages: " + ", ".join(missing)
    return True, "packages: " + ", ".join(REQUIRED_MODULES)


def check_settings() -> Check:
    from app.config import settings

    origins = settings.get_allowed_origins()
    return bool(origins), (
        f"{settings.BODY_FONT} {settings.BODY_FONT_SIZE}pt, "
        f"default file {settings.DEFAULT_FILENAME}, origins {', '.join(origins) or '-'}"
    )


def check_render() -> Check:
    """Render a one-section Kyrie through the same path the endpoint uses."""
    from app.services.generator import GenerationStatus, generate_document

    result = asyncio.run(generate_document({
        "subtitle": "Setup check",
        "sections": [{
            "name": "Kyrie",
            "latin": {"text": "Kyrie eleison.\nChriste eleison."},
            "slovenian": {"text": "Gospod, usmili se.\nKristus, usmili se."},
        }],
    }))
    if result.status is not GenerationStatus.OK:
        return False, f"render {result.status.value}: {result.message or list(result.missing)}"
    return True, f"rendered {len(result.content):,} bytes"


CHECKS: List[Callable[[], Check]] = [check_python, check_modules, check_settings, check_render]


def main() -> int:
    failed = 0
    for check in CHECKS:
        try:
            ok, detail = check()
        except Exception as exc:
            ok, detail = False, f"{check.__name__} raised {exc!r}"
        failed += not ok
        print(f"{'✓' if ok else '✗'} {detail}")

    if failed:
        print(f"{failed} check(s) failed")
        return 1
    print("Ready: uvicorn app.main:app --reload")
    return 0


if __name__ == "__main__":
    sys.exit(main())
