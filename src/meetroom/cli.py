"""CLI entry point for meetroom."""

import argparse
import getpass
import logging
import uuid

import meetroom.io.logging_setup
import meetroom.io.settings
from meetroom.app.calling import LocalCall
from meetroom.app.room_state import CallLayout
from meetroom.core import languages
from meetroom.core.execution import ExecutionClient
from meetroom.tui.app import MeetingRoomApp

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Meeting room with an in-call code runner")
    parser.add_argument(
        "--room",
        type=str,
        default=None,
        help="Room/call id (default: random)",
    )
    parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Your display name (default: login name)",
    )
    parser.add_argument(
        "--participant",
        dest="participants",
        action="append",
        default=[],
        help="Other participant to show in the call (repeatable)",
    )
    parser.add_argument(
        "--personal",
        action="store_true",
        default=False,
        help="Personal room: hide the End call button",
    )
    parser.add_argument(
        "--language",
        choices=languages.LANGUAGE_KEYS,
        default=None,
        help="Initial code panel language (default: from settings, else javascript)",
    )
    parser.add_argument(
        "--layout",
        choices=[layout.value for layout in CallLayout],
        default=None,
        help="Call layout (default: from settings, else speaker-left)",
    )
    parser.add_argument(
        "--execute-url",
        type=str,
        default=None,
        help="Code execution endpoint (default: public Piston instance)",
    )
    parser.add_argument(
        "--request-timeout",
        type=float,
        default=None,
        help="Client-side timeout in seconds for one execution request (default: none)",
    )
    return parser


def _default_name() -> str:
    try:
        return getpass.getuser()
    except (OSError, KeyError):
        return "me"


def main(argv=None):
    args = build_parser().parse_args(argv)
    room_id = args.room or uuid.uuid4().hex[:8]

    runtime = meetroom.io.logging_setup.configure(room_name=room_id)
    config = meetroom.io.settings.load_runner_config(
        execute_url=args.execute_url,
        request_timeout=args.request_timeout,
        default_language=args.language,
        call_layout=args.layout,
    )
    logger.info(
        "app_start room=%s execute_url=%s language=%s layout=%s log=%s",
        room_id,
        config.execute_url,
        config.default_language,
        config.call_layout,
        runtime.file_path,
    )

    call = LocalCall(room_id, participants=[args.name or _default_name(), *args.participants])
    client = ExecutionClient(execute_url=config.execute_url, request_timeout=config.request_timeout)
    app = MeetingRoomApp(call, client=client, config=config, personal_room=args.personal)
    app.run()
    logger.info("app_exit room=%s", room_id)
    print(f"Left room {room_id}. Log: {runtime.file_path}")


if __name__ == "__main__":
    main()
