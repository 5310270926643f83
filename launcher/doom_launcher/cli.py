from __future__ import annotations
import argparse
import json
import uvicorn
from .settings import Settings
from .logging_setup import setup_logging
from .orchestrator import Orchestrator
from .errors import LauncherError
from .models import LaunchOptions
from .api import create_app


def _options(args) -> LaunchOptions | None:
    if args.skill is None and args.warp is None and not args.args:
        return None
    return LaunchOptions(custom_args=args.args, skill=args.skill, warp=args.warp)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="doom-launcher")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("init", help="Create the data directory and seed default files")

    for name, help_text in (("plan", "Print the launch plan for a mod as JSON and exit"),
                            ("launch", "Launch a mod in the configured engine")):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("mod_id")
        p.add_argument("--skill", type=int, choices=range(1, 6))
        p.add_argument("--warp", help="Map to start on, e.g. 'MAP01' or '1 1'")
        p.add_argument("--args", default=None, help="Extra engine arguments")

    api_p = sub.add_parser("api", help="Run REST API (FastAPI)")
    api_p.add_argument("--host", default=None)
    api_p.add_argument("--port", type=int, default=None)

    args = parser.parse_args(argv)
    settings = Settings()
    setup_logging(settings)

    if args.cmd == "init":
        orch = Orchestrator(settings)
        orch.prepare_environment()
        orch.app_settings.load()
        ok, problems = orch.layout.validate_structure()
        for problem in problems:
            print(problem)
        print(f"Data directory: {orch.layout.root}")
        return 0 if ok else 1

    if args.cmd in ("plan", "launch"):
        orch = Orchestrator(settings)
        orch.prepare_environment()
        try:
            if args.cmd == "plan":
                plan = orch.plan(args.mod_id, _options(args)).to_dict()
                print(json.dumps(plan, indent=2, ensure_ascii=False))
                return 0 if plan.get("ok") else 1
            result = orch.launch(args.mod_id, _options(args))
        except LauncherError as e:
            print(f"error: {e}")
            return 1
        print(result.message)
        return 0 if result.success else 1

    if args.cmd == "api":
        app = create_app(settings)
        uvicorn.run(
            app,
            host=args.host or settings.api_host,
            port=args.port or settings.api_port,
            log_level=settings.log_level.lower(),
            log_config=None,
        )
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
