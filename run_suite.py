import os
import subprocess
import sys
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from locales import DEFAULT_ENVIRONMENT, ENVIRONMENTS, LOCALES
from settings import ROOT_DIR

DEFAULT_BROWSERS_PATH = os.path.join(Path.home(), ".cache", "ms-playwright")
RESULTS_DIR = "test-results"


def ensure_playwright_chromium() -> None:
    """
    Download Playwright Chromium unless a build is already present.

    Uses sys.executable so the browser lands next to the interpreter running
    the suite.
    """
    browsers_path = os.environ.get("PLAYWRIGHT_BROWSERS_PATH", DEFAULT_BROWSERS_PATH)

    root = Path(browsers_path)
    if root.exists() and any(root.glob("chromium*")):
        return

    cmd = [sys.executable, "-m", "playwright", "install", "chromium"]
    proc = subprocess.run(cmd, capture_output=True, text=True)

    if proc.returncode != 0:
        raise RuntimeError(
            "Playwright install failed.\n\n"
            f"Python: {sys.executable}\n"
            f"Command: {' '.join(cmd)}\n\n"
            f"STDOUT:\n{proc.stdout}\n\n"
            f"STDERR:\n{proc.stderr}\n"
        )


def build_pytest_command(
    environment: str,
    locale: str,
    extra_args: Optional[List[str]] = None,
    base_env: Optional[Dict[str, str]] = None,
) -> Tuple[List[str], Dict[str, str]]:
    env = dict(os.environ if base_env is None else base_env)
    env["ENV"] = environment
    env["LOCALE"] = locale

    cmd = [
        sys.executable,
        "-m",
        "pytest",
        "tests/e2e",
        "-m",
        "e2e",
        "--output",
        os.path.join(RESULTS_DIR, f"{environment}-{locale}"),
    ]
    cmd += extra_args or []
    return cmd, env


def main(argv: Optional[List[str]] = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] in ("-h", "--help"):
        argv = []
        show_usage = True
    else:
        show_usage = False

    environment = argv[0] if len(argv) >= 1 else DEFAULT_ENVIRONMENT
    locale_arg = argv[1] if len(argv) >= 2 else "all"
    extra_args = argv[2:]

    if show_usage or environment not in ENVIRONMENTS or locale_arg not in list(LOCALES) + ["all"]:
        print('Usage: python3 run_suite.py [ENV] [LOCALE|all] [pytest args...]')
        print("ENV options:", ", ".join(ENVIRONMENTS.keys()))
        print("LOCALE options:", ", ".join(LOCALES.keys()), "or all")
        raise SystemExit(0 if show_usage else 1)

    locales = list(LOCALES) if locale_arg == "all" else [locale_arg]

    ensure_playwright_chromium()

    results = {}
    for locale in locales:
        cmd, env = build_pytest_command(environment, locale, extra_args)
        print(f"\n▶ {ENVIRONMENTS[environment]['label']} / {LOCALES[locale]['label']}")
        results[locale] = subprocess.run(cmd, env=env, cwd=ROOT_DIR).returncode

    print("\nSummary")
    for locale, code in results.items():
        status = "passed" if code == 0 else f"failed (exit {code})"
        print(f"  {environment}/{locale}: {status}")

    raise SystemExit(max(results.values()))


if __name__ == "__main__":
    main()
