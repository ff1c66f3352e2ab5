"""Command line access to campaign comment threads.

Usage:
    pledge-comments show <campaign-id> [--pages N] [--expand]
    pledge-comments recent [--add QUERY | --clear]
"""

import argparse
import asyncio
import sys

import logfire
from dishka import AsyncContainer

from pledge.adapter.error import AdapterError
from pledge.adapter.storage import RecentSearchStore
from pledge.config import Settings
from pledge.domain.value import CampaignId
from pledge.interface.error import UsageError
from pledge.interface.view import CommentsView, CommentsViewFactory, render_text
from pledge.util.di.container import create_container
from pledge.util.error import ConfigurationError
from pledge.util.logging import setup_logging
from pledge.util.observability import configure_logfire


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pledge-comments")
    commands = parser.add_subparsers(dest="command", required=True)

    show = commands.add_parser("show", help="Print a campaign's comment thread")
    show.add_argument("campaign_id")
    show.add_argument("--pages", type=int, default=1, help="Pages of comments to load")
    show.add_argument(
        "--expand", action="store_true", help="Open every thread with replies"
    )

    recent = commands.add_parser("recent", help="Show or edit recent searches")
    group = recent.add_mutually_exclusive_group()
    group.add_argument("--add", metavar="QUERY")
    group.add_argument("--clear", action="store_true")
    return parser


async def expand_all(view: CommentsView) -> None:
    """Open every loaded thread that has replies, breadth first."""
    pending = [c.id for c in view.comments]
    while pending:
        comment_id = pending.pop(0)
        node = view.find(comment_id)
        if node is None or node.reply_count == 0:
            continue
        if comment_id not in view.expanded:
            await view.toggle_replies(comment_id)
        node = view.find(comment_id)
        if node is not None:
            pending.extend(reply.id for reply in node.replies)


async def show_thread(
    container: AsyncContainer, campaign_id: str, pages: int = 1, expand: bool = False
) -> str:
    """Load and render a campaign's comments.

    Raises:
        UsageError: If fewer than one page is requested
    """
    if pages < 1:
        raise UsageError("--pages must be at least 1")

    async with container() as request_container:
        factory = await request_container.get(CommentsViewFactory)
        view = factory.create(CampaignId(campaign_id))
        try:
            await view.mount()
            for _ in range(pages - 1):
                if not view.has_more:
                    break
                await view.load_more()
            if expand:
                await expand_all(view)
            lines = [render_text(view)]
            if view.has_more:
                lines.append("(more comments available)")
            for toast in view.notifier.drain():
                lines.append(f"! {toast.title}: {toast.description}")
            return "\n".join(line for line in lines if line)
        finally:
            view.unmount()


async def recent_searches(
    container: AsyncContainer, add: str | None = None, clear: bool = False
) -> str:
    store = await container.get(RecentSearchStore)
    if clear:
        store.clear()
    elif add is not None:
        store.add(add)
    return "\n".join(store.items)


async def run(args: argparse.Namespace, container: AsyncContainer) -> str:
    try:
        if args.command == "show":
            return await show_thread(
                container, args.campaign_id, pages=args.pages, expand=args.expand
            )
        return await recent_searches(container, add=args.add, clear=args.clear)
    finally:
        await container.close()


def main(argv: list[str] | None = None) -> int:
    """Entry point of the ``pledge-comments`` command."""
    args = build_parser().parse_args(argv)

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    try:
        output = asyncio.run(run(args, create_container()))
    except (UsageError, ConfigurationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except AdapterError as e:
        logfire.error("Command failed", command=args.command, error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
