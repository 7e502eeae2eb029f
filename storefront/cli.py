# storefront/cli.py
"""
Command line front-end for the storefront client.

    storefront login shopper@seekon.com
    storefront cart add p-1001 --size 42 --color black
    storefront cart show
    storefront flash-sale --sort discount
    storefront serve --port 3000

The bearer token is kept in TOKEN_FILE between runs.
"""

import argparse
import asyncio
import getpass
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from storefront.client.storefront import StorefrontClient
from storefront.client.token_store import FileTokenStore
from storefront.core.config import Settings
from storefront.core.exceptions import StorefrontError
from storefront.core.logging_config import setup_logging
from storefront.flash_sale import (
    SORT_KEYS,
    discount_percent,
    flash_sale_products,
    format_countdown,
    sale_price,
    sort_flash_sale,
    time_left,
    total_savings,
    watch_countdown,
)
from storefront.schemas.cart_schema import Cart
from storefront.schemas.product_schema import Product

logger = logging.getLogger(__name__)


# ========================================
# FORMATTING
# ========================================

def format_money(amount: float) -> str:
    return f"${amount:,.2f}"


def format_cart(cart: Cart) -> str:
    """Renders the cart as a plain text table."""
    if cart.is_empty:
        return "Your cart is empty."

    lines = ["Your cart", ""]
    for item in cart.items:
        variant = " / ".join(part for part in (item.size, item.color) if part)
        lines.append(f"- {item.name or item.product_id} [{item.product_id}]" + (f" ({variant})" if variant else ""))
        lines.append(f"    {item.quantity} x {format_money(item.price)} = {format_money(item.subtotal)}")
    lines.append("")
    lines.append(f"Items: {cart.total_items}")
    lines.append(f"Total: {format_money(cart.total_price)}")
    return "\n".join(lines)


def format_product(product: Product) -> str:
    price = format_money(product.price)
    if product.effective_price < product.price:
        price = f"{format_money(product.effective_price)} (was {price})"
    brand = f"{product.brand} " if product.brand else ""
    return f"{product.id:<10} {brand}{product.name} - {price}"


# ========================================
# COMMANDS
# ========================================

async def _cmd_login(shop: StorefrontClient, args) -> int:
    password = args.password or getpass.getpass("Password: ")
    user = await shop.auth.login(args.email, password)
    print(f"Logged in as {user.name or user.email} ({user.role})")
    return 0


async def _cmd_register(shop: StorefrontClient, args) -> int:
    password = args.password or getpass.getpass("Password: ")
    user = await shop.auth.register(args.name, args.email, password)
    print(f"Account created for {user.email}")
    return 0


async def _cmd_logout(shop: StorefrontClient, args) -> int:
    shop.auth.logout()
    print("Logged out")
    return 0


async def _cmd_whoami(shop: StorefrontClient, args) -> int:
    user = await shop.auth.validate_token()
    print(f"{user.name} <{user.email}> ({user.role})")
    return 0


async def _cmd_cart(shop: StorefrontClient, args) -> int:
    gateway = shop.cart_gateway
    action = args.cart_action or "show"
    if action == "show":
        cart = await gateway.fetch_cart()
    elif action == "add":
        cart = await gateway.add_item(args.product_id, args.size, args.color, args.quantity)
    elif action == "update":
        cart = await gateway.update_quantity(args.product_id, args.size, args.color, args.quantity)
    elif action == "remove":
        cart = await gateway.remove_item(args.product_id, args.size, args.color)
    else:
        cart = await gateway.clear_cart()
    print(format_cart(cart))
    return 0


async def _cmd_products(shop: StorefrontClient, args) -> int:
    if args.products_action == "get":
        product = await shop.products.get_product(args.product_id)
        print(format_product(product))
        if product.sizes:
            print(f"  sizes:  {', '.join(product.sizes)}")
        if product.colors:
            print(f"  colors: {', '.join(product.colors)}")
        return 0

    products = await shop.products.list_products(category=args.category, brand=args.brand)
    if not products:
        print("No products found.")
    for product in products:
        print(format_product(product))
    return 0


async def _cmd_flash_sale(shop: StorefrontClient, args) -> int:
    flash_sale = await shop.site_settings.get_flash_sale_settings()
    products = sort_flash_sale(flash_sale_products(await shop.products.list_products()), args.sort)

    if flash_sale.is_running() and flash_sale.end_time:
        print(f"Flash sale ends in {format_countdown(time_left(flash_sale.end_time))}")
    elif not flash_sale.is_active:
        print("No site-wide flash sale running.")

    if not products:
        print("No flash sale products.")
        return 0

    for product in products:
        ends = f", ends in {format_countdown(time_left(product.sale_end_time))}" if product.sale_end_time else ""
        print(f"{product.id:<10} {product.name} - {format_money(sale_price(product))} "
              f"(-{round(discount_percent(product))}%{ends})")
    print(f"Total savings: {format_money(total_savings(products))}")

    if args.watch and flash_sale.is_running() and flash_sale.end_time:
        await watch_countdown(flash_sale.end_time, lambda c: print(f"\r{format_countdown(c)}", end="", flush=True))
        print()
    return 0


COMMANDS = {
    "login": _cmd_login,
    "register": _cmd_register,
    "logout": _cmd_logout,
    "whoami": _cmd_whoami,
    "cart": _cmd_cart,
    "products": _cmd_products,
    "flash-sale": _cmd_flash_sale,
}


async def run(shop: StorefrontClient, args: argparse.Namespace) -> int:
    """Runs one client command; errors are printed and give exit status 1."""
    try:
        return await COMMANDS[args.command](shop, args)
    except StorefrontError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
    except (ValidationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


# ========================================
# ARGUMENT PARSING
# ========================================

def _add_variant_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("product_id")
    parser.add_argument("--size", default=None)
    parser.add_argument("--color", default=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="storefront", description="Seekon storefront client")
    parser.add_argument("--api-url", help="Backend URL (default: API_URL setting)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Log in and store the token")
    login.add_argument("email")
    login.add_argument("--password")

    register = sub.add_parser("register", help="Create an account")
    register.add_argument("name")
    register.add_argument("email")
    register.add_argument("--password")

    sub.add_parser("logout", help="Forget the stored token")
    sub.add_parser("whoami", help="Show the logged in user")

    cart = sub.add_parser("cart", help="Show or change the cart")
    cart_sub = cart.add_subparsers(dest="cart_action")
    cart_sub.add_parser("show")
    add = cart_sub.add_parser("add")
    _add_variant_args(add)
    add.add_argument("--quantity", "-q", type=int, default=1)
    update = cart_sub.add_parser("update")
    _add_variant_args(update)
    update.add_argument("--quantity", "-q", type=int, required=True)
    remove = cart_sub.add_parser("remove")
    _add_variant_args(remove)
    cart_sub.add_parser("clear")

    products = sub.add_parser("products", help="Browse the catalogue")
    products_sub = products.add_subparsers(dest="products_action")
    listing = products_sub.add_parser("list")
    listing.add_argument("--category")
    listing.add_argument("--brand")
    get = products_sub.add_parser("get")
    get.add_argument("product_id")
    products.set_defaults(category=None, brand=None)

    flash = sub.add_parser("flash-sale", help="Show flash sale products and countdown")
    flash.add_argument("--sort", choices=SORT_KEYS, default="ending-soon")
    flash.add_argument("--watch", action="store_true", help="Keep counting down until the sale ends")

    serve = sub.add_parser("serve", help="Run the in-memory development backend")
    serve.add_argument("--host")
    serve.add_argument("--port", type=int)

    return parser


def _serve(settings: Settings, args: argparse.Namespace) -> int:
    import uvicorn

    from storefront.backend.main import create_app

    uvicorn.run(
        create_app(settings),
        host=args.host or settings.BACKEND_HOST,
        port=args.port or settings.BACKEND_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


async def _main_async(settings: Settings, args: argparse.Namespace) -> int:
    async with StorefrontClient(settings=settings, token_store=FileTokenStore(settings.TOKEN_FILE)) as shop:
        return await run(shop, args)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {"API_URL": args.api_url} if args.api_url else {}
    if args.verbose:
        overrides["LOG_LEVEL"] = "DEBUG"
    settings = Settings(**overrides)
    setup_logging(settings)
    logger.debug(f"API at {settings.api_base_url}, session file {settings.TOKEN_FILE}")

    if args.command == "serve":
        return _serve(settings, args)
    return asyncio.run(_main_async(settings, args))


if __name__ == "__main__":
    sys.exit(main())
