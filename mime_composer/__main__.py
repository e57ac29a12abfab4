"""Entry point: render a message to stdout.

Usage::

    python -m mime_composer --to a@example.com --from b@example.com \
        --subject "Report" --body-file body.txt --attach report.pdf:Report.pdf:application/pdf
"""

from __future__ import annotations

import argparse
import mimetypes
import sys
from pathlib import Path

import structlog

from .composer import MessageComposer
from .config import ComposerConfig
from .crypto import build_decryptor
from .logging import setup_logging
from .models import Attachment, Message

logger = structlog.get_logger()


def parse_attachment(value: str) -> Attachment:
    """Parse ``PATH[:NAME[:TYPE]]``; name and type default from the path."""
    path, _, rest = value.partition(":")
    name, _, content_type = rest.partition(":")
    name = name or Path(path).name
    content_type = content_type or mimetypes.guess_type(name)[0] or "application/octet-stream"
    return Attachment(filename=path, name=name, type=content_type)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m mime_composer", description=__doc__.splitlines()[0])
    parser.add_argument("--to", required=True)
    parser.add_argument("--from", dest="from_address", required=True)
    parser.add_argument("--from-name", default="")
    parser.add_argument("--cc", default="")
    parser.add_argument("--bcc", default="")
    parser.add_argument("--reply-to", default="")
    parser.add_argument("--subject", default="")
    parser.add_argument("--in-reply-to", default="")
    body = parser.add_mutually_exclusive_group()
    body.add_argument("--body", default="")
    body.add_argument("--body-file", type=Path)
    parser.add_argument("--html", action="store_true", help="the body is HTML")
    parser.add_argument("--attach", action="append", default=[], metavar="PATH[:NAME[:TYPE]]")
    parser.add_argument("--auto-bcc", default="")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = ComposerConfig()
    setup_logging(json=config.log_json, level=config.log_level)

    body = args.body_file.read_text(encoding="utf-8") if args.body_file else args.body
    message = Message(
        to=args.to,
        from_address=args.from_address,
        from_name=args.from_name,
        cc=args.cc,
        bcc=args.bcc,
        reply_to=args.reply_to,
        subject=args.subject,
        body=body,
        is_html=args.html,
        in_reply_to_id=args.in_reply_to,
    )
    composer = MessageComposer(message, config=config, decrypt=build_decryptor(config))
    composer.add_attachments(parse_attachment(item) for item in args.attach)
    if args.auto_bcc:
        composer.set_auto_bcc(args.auto_bcc)

    rendered = composer.render()
    sys.stdout.buffer.write(rendered.as_bytes())
    sys.stdout.buffer.flush()
    logger.info(
        "message_composed",
        recipients=list(rendered.recipients),
        omitted=[r.attachment.name for r in rendered.omitted],
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
