#!/usr/bin/env python3
"""
CLI runner for the sketch solver.

Loads a drawing from disk, submits it to the solving service and prints the
results, or serves the board API.
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent))

from config.logging_config import setup_logging
from config.settings import settings
from serving.board_session import BoardSession
from services.solver_client import SolverClient
from utils.bbox_utils import compute_bounds, draw_bounds
from utils.image_utils import load_drawing

logger = logging.getLogger("cli_solve")


def parse_variables(pairs):
    """Turn ["x=3", "y=4"] into {"x": "3", "y": "4"}."""
    variables = {}
    for pair in pairs or []:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{pair}'")
        variables[name.strip()] = value.strip()
    return variables


async def solve_drawing_cli(
    image_path: str,
    variables: dict,
    solver_url: str,
    delay: float,
    output_path: str = None
) -> int:
    """Submit one drawing and print what the solver made of it."""

    print("=" * 60)
    print(f"Solving: {image_path}")
    print("=" * 60)

    if not Path(image_path).exists():
        print(f"❌ Error: File not found: {image_path}")
        return 1

    solver = SolverClient(base_url=solver_url, timeout=settings.solver_timeout)
    session = BoardSession.from_settings(settings, solver=solver)
    session.submissions.display_delay = delay

    try:
        drawing = load_drawing(image_path, session.canvas.raster.size)
        session.canvas.load_image(drawing)
        for name, value in variables.items():
            session.variables.assign(name, value)

        print(f"Canvas: {session.canvas.raster.width}x{session.canvas.raster.height}")
        print(f"Variables: {session.variables.as_dict() or '(none)'}")
        print(f"\nSending to {solver_url} ...")

        session.submit()
        await session.wait_idle()

        if session.last_error:
            print(f"❌ {session.last_error}")
            return 2

        print(f"\n✓ {len(session.overlays)} result(s)")
        for annotation in session.overlays:
            x, y = annotation.position.as_tuple()
            print(f"  {annotation.text}    @ ({x:.1f}, {y:.1f})")

        if len(session.variables):
            print("\nVariables:")
            for name, value in session.variables.as_dict().items():
                print(f"  {name} = {value}")

        if output_path:
            snapshot = session.canvas.raster.snapshot()
            rendered = draw_bounds(snapshot, compute_bounds(snapshot), session.overlays.annotations())
            rendered.save(output_path, format="PNG")
            print(f"\n✓ Rendered board saved to {output_path}")

        return 0

    finally:
        await session.close()


def serve(host: str, port: int) -> None:
    """Run the board API with uvicorn."""
    import uvicorn

    from serving.board_api import app

    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())


def main():
    parser = argparse.ArgumentParser(description="Sketch solver CLI")
    parser.add_argument("image", nargs="?", help="PNG drawing to solve")
    parser.add_argument("--var", action="append", default=[], metavar="NAME=VALUE",
                        help="Known variable binding (repeatable)")
    parser.add_argument("--output", "-o", help="Write the board with results to this PNG")
    parser.add_argument("--delay", type=float, default=0.0,
                        help="Display delay before results appear (default: 0)")
    parser.add_argument("--solver-url", default=settings.solver_url, help="Solving service URL")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    parser.add_argument("--serve", action="store_true", help="Run the board API instead")
    parser.add_argument("--host", default=settings.api_host, help="API host for --serve")
    parser.add_argument("--port", type=int, default=settings.api_port, help="API port for --serve")

    args = parser.parse_args()

    setup_logging(args.log_level, settings.log_file or None)

    if args.serve:
        serve(args.host, args.port)
        return 0

    if not args.image:
        parser.error("an image is required unless --serve is given")

    try:
        variables = parse_variables(args.var)
    except argparse.ArgumentTypeError as e:
        parser.error(str(e))

    return asyncio.run(solve_drawing_cli(
        image_path=args.image,
        variables=variables,
        solver_url=args.solver_url,
        delay=args.delay,
        output_path=args.output
    ))


if __name__ == "__main__":
    sys.exit(main())
