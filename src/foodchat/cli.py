"""Command-line interface for FoodChat."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from .config import FoodChatConfig
from .console import (
    TranscriptPrinter,
    format_entries,
    format_seller,
    render_cart,
    render_catalog,
)
from .errors import CheckoutError, FoodChatError
from .marketplace.catalog import load_catalog
from .marketplace.launcher import FoodChatLauncher
from .marketplace.orders.models import CheckoutDetails, OrderStatus
from .marketplace.search import SearchEngine, SortMode, TagMatch
from .platform.logger import setup_logging

logger = logging.getLogger(__name__)

CHAT_HELP = """Type anything to chat, or use a command:
  /add N [QTY]                      add item N of the last list to the cart
  /offer N                          add offer N of the last offers to the cart
  /cart                             show the cart
  /qty ITEM SELLER QTY              change a cart line (0 removes it)
  /remove ITEM SELLER               remove a cart line
  /checkout NAME|PHONE|ADDRESS|NOTES  place the order
  /busy SELLER on|off               toggle a seller's busy flag
  /promo SELLER OFFER               let a seller push one of its offers
  /status ORDER STATUS              let the seller advance an order
  /say SELLER TEXT                  send a message as a seller
  /sellers                          list sellers and wait times
  /quit                             leave the chat"""

DEMO_CUSTOMER = CheckoutDetails(
    name="Budi Santoso",
    phone="0812-3456-7890",
    address="Jl. Merdeka No. 10, Jakarta",
    notes="Extra sambal please",
)


def _load_config(args) -> FoodChatConfig:
    """Load the .env file, then build the configuration with CLI overrides."""
    env_file = getattr(args, "env_file", ".env")
    if load_dotenv(env_file):
        logger.info(f"Loaded environment variables from env file at path: {env_file}")
    else:
        logger.debug(f"No environment variables loaded from env file at path: {env_file}")

    overrides = {}
    if args.catalog is not None:
        overrides["catalog_path"] = args.catalog
    if args.latency_scale is not None:
        overrides["latency_scale"] = args.latency_scale
    return FoodChatConfig(**overrides)


def _parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value.lower())
    except ValueError:
        choices = ", ".join(s.value for s in OrderStatus)
        raise ValueError(f"Unknown status {value!r}; choose one of: {choices}") from None


def _pick(items: list, index: str, what: str):
    position = int(index)
    if not 1 <= position <= len(items):
        raise ValueError(f"No {what} #{position}; there are {len(items)}")
    return items[position - 1]


def handle_command(session: FoodChatLauncher, line: str) -> bool:
    """Run one slash command against a chat session.

    Returns:
        False when the session should end.

    Raises:
        FoodChatError, KeyError, ValueError: When the command cannot be carried out.

    """
    command, _, rest = line.strip().partition(" ")
    command = command.lower()
    rest = rest.strip()
    buyer = session.buyer

    if command in ("/quit", "/exit"):
        return False
    if command == "/help":
        print(CHAT_HELP)
    elif command == "/add":
        args = rest.split()
        if not args:
            raise ValueError("Usage: /add N [QTY]")
        entry = _pick(buyer.last_entries, args[0], "item")
        quantity = int(args[1]) if len(args) > 1 else 1
        buyer.add_to_cart(entry, quantity)
        print(render_cart(buyer.cart))
    elif command == "/offer":
        if not rest:
            raise ValueError("Usage: /offer N")
        buyer.add_offer(_pick(buyer.last_offers, rest, "offer"))
        print(render_cart(buyer.cart))
    elif command == "/cart":
        print(render_cart(buyer.cart))
    elif command == "/qty":
        item_id, seller_id, quantity = rest.split()
        buyer.update_quantity(item_id, seller_id, int(quantity))
        print(render_cart(buyer.cart))
    elif command == "/remove":
        item_id, seller_id = rest.split()
        buyer.remove(item_id, seller_id)
        print(render_cart(buyer.cart))
    elif command == "/checkout":
        parts = [part.strip() for part in rest.split("|")] + ["", "", "", ""]
        details = CheckoutDetails(
            name=parts[0], phone=parts[1], address=parts[2], notes=parts[3]
        )
        buyer.checkout(details)
    elif command == "/busy":
        seller_id, state = rest.split()
        session.seller(seller_id).set_busy(state.lower() in ("on", "true", "yes", "1"))
    elif command == "/promo":
        seller_id, offer_id = rest.split()
        if not session.seller(seller_id).send_offer(offer_id):
            print(f"{seller_id} has no offer {offer_id}")
    elif command == "/status":
        order_id, status = rest.split()
        order = session.orders.get(order_id)
        session.seller(order.seller.id).advance_order(order_id, _parse_status(status))
    elif command == "/say":
        seller_id, _, text = rest.partition(" ")
        if not text:
            raise ValueError("Usage: /say SELLER TEXT")
        session.seller(seller_id).send_message(text)
    elif command == "/sellers":
        for seller in session.catalog.sellers:
            print(format_seller(seller))
    else:
        print(f"Unknown command {command}. Type /help for the list of commands.")
    return True


async def run_chat(config: FoodChatConfig) -> None:
    """Run an interactive chat session on stdin/stdout."""
    async with FoodChatLauncher(config) as session:
        session.bus.subscribe(TranscriptPrinter())
        print(f"Welcome to FoodChat, {config.buyer_name}! Type /help for commands.")

        while True:
            try:
                line = await asyncio.to_thread(input, "you> ")
            except EOFError:
                break
            line = line.strip()
            if not line:
                continue

            if line.startswith("/"):
                try:
                    keep_going = handle_command(session, line)
                except CheckoutError as e:
                    print(f"Checkout failed: {e}")
                    continue
                except (FoodChatError, KeyError, ValueError) as e:
                    print(f"Error: {e}")
                    continue
                if not keep_going:
                    break
            else:
                session.buyer.send(line)
            await session.bus.flush()


async def run_demo(config: FoodChatConfig) -> None:
    """Play a scripted conversation from greeting to delivery."""
    async with FoodChatLauncher(config) as session:
        session.bus.subscribe(TranscriptPrinter())
        buyer = session.buyer

        for text in ("hi", "what's your special offer today?", "nasi goreng under 20k"):
            buyer.send(text)
            await session.bus.flush()

        if not buyer.last_entries:
            logger.error("Demo search returned no results")
            return
        buyer.add_to_cart(buyer.last_entries[0], 2)
        print(render_cart(buyer.cart))

        try:
            buyer.checkout(CheckoutDetails(name=DEMO_CUSTOMER.name, address="somewhere"))
        except CheckoutError as e:
            print(f"Checkout failed: {e}")

        order = buyer.checkout(DEMO_CUSTOMER)
        await session.bus.flush()

        seller = session.seller(order.seller.id)
        for status in (
            OrderStatus.ACCEPTED,
            OrderStatus.ON_PROCESS,
            OrderStatus.BUSY,
            OrderStatus.DRIVER_ON_WAY,
            OrderStatus.COMPLETED,
        ):
            seller.advance_order(order.id, status)
            await session.bus.flush()

        buyer.send("thanks!")
        await session.bus.flush()


def run_chat_command(args):
    """Handle the chat subcommand."""
    asyncio.run(run_chat(_load_config(args)))


def run_demo_command(args):
    """Handle the demo subcommand."""
    asyncio.run(run_demo(_load_config(args)))


def run_search_command(args):
    """Handle the search subcommand."""
    config = _load_config(args)
    catalog = load_catalog(config.catalog_path)
    engine = SearchEngine(catalog, result_limit=args.limit or config.result_limit)
    query = catalog.query_parser().parse(args.query)
    match = TagMatch.ALL if args.all_tags else TagMatch.ANY

    results = engine.search_query(query, sort=SortMode(args.sort), match=match)
    summary = f"tags: {', '.join(sorted(query.tags)) or '(none)'}"
    if query.max_price is not None:
        summary += f" | max price: {query.max_price:,}"
    print(summary)
    if results:
        print(format_entries(results))
    else:
        print("No matching items.")


def run_catalog_command(args):
    """Handle the catalog subcommand."""
    config = _load_config(args)
    print(render_catalog(load_catalog(config.catalog_path)))


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--catalog",
        type=Path,
        default=None,
        help="Catalog YAML file or directory (default: FOODCHAT_CATALOG env var or the bundled demo catalog)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help=".env file with environment variables to load.",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="warning",
        help="Logging level (default: warning)",
    )
    parser.add_argument(
        "--latency-scale",
        type=float,
        default=None,
        help="Multiplier for simulated reply delays; 0 answers instantly (default: FOODCHAT_LATENCY_SCALE env var or 1.0)",
    )


def main(argv: list[str] | None = None):
    """Run main CLI."""
    parser = argparse.ArgumentParser(
        prog="foodchat",
        description="FoodChat - multi-seller food ordering chat simulation",
    )

    subparsers = parser.add_subparsers(
        dest="command", help="Available commands", required=True
    )

    # chat subcommand
    chat_parser = subparsers.add_parser("chat", help="Start an interactive chat session")
    chat_parser.set_defaults(func=run_chat_command)
    _add_common_arguments(chat_parser)

    # demo subcommand
    demo_parser = subparsers.add_parser(
        "demo", help="Play a scripted conversation from greeting to delivery"
    )
    demo_parser.set_defaults(func=run_demo_command)
    _add_common_arguments(demo_parser)

    # search subcommand
    search_parser = subparsers.add_parser(
        "search", help="Search the catalog and print ranked results"
    )
    search_parser.set_defaults(func=run_search_command)
    search_parser.add_argument("query", help="Free-text query, e.g. 'spicy under 20k'")
    search_parser.add_argument(
        "--sort",
        choices=[mode.value for mode in SortMode],
        default=SortMode.MATCH.value,
        help="Result ordering (default: match)",
    )
    search_parser.add_argument(
        "--all-tags",
        action="store_true",
        help="Require every query tag instead of any of them",
    )
    search_parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of results (default: FOODCHAT_RESULT_LIMIT env var or 8)",
    )
    _add_common_arguments(search_parser)

    # catalog subcommand
    catalog_parser = subparsers.add_parser(
        "catalog", help="List sellers, menus and offers"
    )
    catalog_parser.set_defaults(func=run_catalog_command)
    _add_common_arguments(catalog_parser)

    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        args.func(args)
    except FoodChatError as e:
        logger.error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
