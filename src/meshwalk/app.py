"""MeshWalk application entry point.

Wires together configuration, the state dispatcher, asset loading and
the GL viewport, then runs the Qt event loop.
"""

# Disable PyOpenGL's per-call error checking BEFORE any GL imports.
# macOS Metal translation layer leaves stale GL errors that cause
# PyOpenGL's automatic error checker to raise on every GL call.
import OpenGL
OpenGL.ERROR_CHECKING = False

import argparse
import logging
import sys
from pathlib import Path

from PySide6.QtGui import QSurfaceFormat
from PySide6.QtWidgets import QApplication, QMainWindow

from meshwalk.core.config_loader import AppConfig, load_app_config
from meshwalk.core.movement import Pose
from meshwalk.core.state import AppState, Dispatcher
from meshwalk.loaders.asset_manager import AssetManager
from meshwalk.rendering.gl_widget import GLViewport, create_gl_format

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meshwalk",
        description="Walk through a textured mesh with WASD and the arrow keys.",
    )
    parser.add_argument("--config", type=Path, help="JSON config file")
    parser.add_argument("--mesh", type=Path, help="mesh text file (x y z u v rows)")
    parser.add_argument("--texture", type=Path, help="texture image file")
    parser.add_argument("--log-level", help="logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def resolve_config(args: argparse.Namespace) -> AppConfig:
    """Config file values, then command-line overrides."""
    config = load_app_config(args.config)
    return config.with_overrides(
        mesh_path=args.mesh,
        texture_path=args.texture,
        log_level=args.log_level,
    )


def initial_state(config: AppConfig) -> AppState:
    return AppState(pose=Pose(position=config.start_position, facing=config.start_facing))


def main(argv=None):
    """Launch the MeshWalk application."""
    args = build_arg_parser().parse_args(argv)
    try:
        config = resolve_config(args)
    except (OSError, ValueError) as e:
        print(f"meshwalk: cannot load config: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(name)s: %(message)s",
    )

    # Set OpenGL format before creating QApplication
    QSurfaceFormat.setDefaultFormat(create_gl_format())
    app = QApplication(sys.argv[:1])

    dispatcher = Dispatcher(initial_state(config))

    gl_widget = GLViewport(dispatcher)
    window = QMainWindow()
    window.setWindowTitle("MeshWalk")
    window.setCentralWidget(gl_widget)
    window.resize(config.window_width, config.window_height)

    # Fire-and-forget: results arrive as dispatcher events
    assets = AssetManager(
        dispatcher,
        mesh_path=config.mesh_path,
        texture_path=config.texture_path,
    )
    assets.request_all()

    app.aboutToQuit.connect(gl_widget.cleanup)

    window.show()
    gl_widget.setFocus()
    logger.info("MeshWalk started (mesh=%s, texture=%s)", config.mesh_path, config.texture_path)

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
