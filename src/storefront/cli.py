"""``sasya`` command line: browse, fill the cart, check out and track orders.

The cart and the sign-in session are kept in device storage between runs.

Usage:
    sasya products
    sasya feedback --name Asha --email asha@example.com --rating 5 --text "Lovely oil"
    sasya cart add --quantity 2
    sasya cart discount SAVE10
    sasya sign-in --email asha@example.com --password secret
    sasya checkout --fullname "Asha Rao" --phone 9876543210 --address "12 MG Road"
    sasya track SM-1A2B3C4D 9876543210 --watch
    sasya admin export orders.xlsx
"""

import argparse
import asyncio
import sys
from pathlib import Path

from shared.logging import configure_logging
from storefront import catalog
from storefront.admin import AdminDashboard
from storefront.cart import Cart
from storefront.checkout import PAYMENT_METHODS, Checkout, CheckoutForm
from storefront.client import StorefrontClient
from storefront.errors import StorefrontError
from storefront.feedback import FeedbackForm, submit_feedback
from storefront.storage import SESSION_KEY, CartStorage, LocalStorage
from storefront.tracking import OrderTracker, order_history

STATE_DIR = Path.home() / ".sasya-mantra"


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------
def _money(value) -> str:
    return f"Rs. {float(value or 0):.2f}"


def _print_cart(cart: Cart) -> None:
    if cart.is_empty:
        print("Your cart is empty.")
    for item in cart.items:
        variant = f" ({item.variant})" if item.variant else ""
        print(f"{item.name}{variant} x {item.quantity}  {_money(item.line_total)}")
    if cart.discount.is_active:
        print(f"Discount {cart.discount.code}: -{_money(cart.total_price - cart.final_price)}")
    print(f"Items: {cart.total_items}  Total: {_money(cart.final_price)}")
    if cart.error:
        print(f"! {cart.error}")


def _print_order(order: dict) -> None:
    print(
        f"{order['id']}  {order.get('status', '?'):<10}  {order.get('tracking_number') or '-':<12}  "
        f"{order.get('product_name')} x {order.get('quantity')}  {_money(order.get('total'))}"
    )


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------
def cmd_products(args, ctx):
    for product in catalog.PRODUCTS:
        print(f"{product.name} ({product.variant})  {_money(product.price)}  max {product.max_quantity} per order")
        print(f"  {catalog.PRODUCT_DESCRIPTION}")


def cmd_about(args, ctx):
    print(catalog.ABOUT)
    print()
    for title, details in catalog.CONTACT.items():
        print(f"{title}: {details}")
    print(catalog.SHIPPING_NOTE)


def cmd_feedback(args, ctx):
    if args.rating is not None or args.text is not None:
        submit_feedback(
            FeedbackForm(
                name=args.name,
                email=args.email,
                product=args.product,
                rating=args.rating,
                feedback=args.text or "",
            )
        )
        print("Thank you for your feedback!")
        return

    print(catalog.FEEDBACK_INTRO)
    print()
    print("  ".join(f"{label}: {value}" for label, value in catalog.FEEDBACK_STATS))
    print()
    print("Recent customer reviews")
    for review in catalog.TESTIMONIALS:
        stars = "*" * review["rating"]
        print(f"{stars:<5}  {review['name']} ({review['date']}) on {review['product']}")
        print(f"       \"{review['feedback']}\"")


def cmd_cart(args, ctx):
    cart = ctx.cart()
    if args.cart_command == "add":
        product = catalog.find_product(args.product)
        if product is None:
            raise StorefrontError(f"Unknown product: {args.product}")
        cart.add_item(product, args.quantity)
    elif args.cart_command == "remove":
        cart.remove_item(args.product)
    elif args.cart_command == "set":
        cart.update_quantity(args.product, args.quantity)
    elif args.cart_command == "clear":
        cart.clear_cart()
    elif args.cart_command == "discount":
        if not asyncio.run(cart.apply_discount(args.code)):
            raise StorefrontError(cart.error)
    _print_cart(cart)


def cmd_register(args, ctx):
    client = ctx.client()
    client.register(args.email, args.password, args.display_name)
    print(f"Registered {args.email}. Sign in to place orders.")


def cmd_sign_in(args, ctx):
    client = ctx.client()
    session = client.sign_in(args.email, args.password)
    ctx.storage.set_item(SESSION_KEY, session["access_token"])
    print(f"Signed in as {args.email} ({session['role']}).")


def cmd_sign_out(args, ctx):
    client = ctx.client()
    try:
        client.sign_out()
    finally:
        ctx.storage.remove_item(SESSION_KEY)
    print("Signed out.")


def cmd_whoami(args, ctx):
    user = ctx.client().me()
    if user is None:
        print("Not signed in.")
    else:
        print(f"{user['email']} ({user['role']})")


def cmd_checkout(args, ctx):
    form = CheckoutForm(
        fullname=args.fullname,
        phone=args.phone,
        address=args.address,
        alternate_address=args.alternate_address,
        city=args.city,
        state=args.state,
        zip_code=args.zip_code,
        payment_method=args.payment_method,
    )
    orders = Checkout(ctx.cart(), ctx.client()).submit(form)
    for order in orders:
        print(f"Order placed: {order['id']}  tracking number {order['tracking_number']}")


def cmd_orders(args, ctx):
    orders = order_history(ctx.client(), status=args.status)
    if not orders:
        print("No orders yet.")
    for order in orders:
        _print_order(order)


def cmd_track(args, ctx):
    tracker = OrderTracker(
        ctx.client(),
        interval=args.interval,
        backoff=args.backoff,
        max_interval=args.max_interval,
        max_polls=None if args.watch else 1,
    )
    for order in tracker.poll(args.tracking_number, args.phone):
        _print_order(order)


def cmd_admin(args, ctx):
    dashboard = AdminDashboard(ctx.client())
    if args.admin_command == "update":
        changes = {
            key: getattr(args, key)
            for key in ("status", "tracking_number", "quantity", "phone", "address")
            if getattr(args, key) is not None
        }
        _print_order(dashboard.update_order(args.order_id, **changes))
        return
    if args.admin_command == "delete-order":
        dashboard.delete_order(args.order_id)
        print(f"Deleted order {args.order_id}.")
        return
    if args.admin_command == "delete-user":
        dashboard.delete_user(args.user_id)
        print(f"Deleted user {args.user_id}.")
        return

    dashboard.refresh()
    if args.admin_command == "orders":
        for order in dashboard.search_orders(args.search):
            _print_order(order)
    elif args.admin_command == "users":
        for user in dashboard.search_users(args.search):
            print(f"{user['id']}  {user['email']:<32}  {user['role']}")
    elif args.admin_command == "export":
        path = dashboard.export_orders(args.path)
        print(f"Exported {len(dashboard.orders)} orders to {path}.")


# ---------------------------------------------------------------------------
# Wiring
# ---------------------------------------------------------------------------
class Context:
    """Lazily built collaborators shared by the commands of one run."""

    def __init__(self, api_url=None, storage_path=None):
        self.api_url = api_url
        self.storage = LocalStorage(storage_path)

    def cart(self) -> Cart:
        return Cart(CartStorage(self.storage))

    def client(self) -> StorefrontClient:
        return StorefrontClient(self.api_url, token=self.storage.get_item(SESSION_KEY))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sasya", description="Sasya Mantra storefront")
    parser.add_argument("--api-url", help="Storefront API base URL (default: $SASYA_API_URL)")
    parser.add_argument("--storage", help="Device storage file (default: $SASYA_STORAGE_PATH)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("products", help="Show what is on sale").set_defaults(func=cmd_products)
    subparsers.add_parser("about", help="About Sasya Mantra and how to reach us").set_defaults(func=cmd_about)

    feedback = subparsers.add_parser("feedback", help="Customer reviews, or share your own with --rating")
    feedback.add_argument("--name", default="")
    feedback.add_argument("--email", default="")
    feedback.add_argument("--product", help=f"One of: {', '.join(catalog.FEEDBACK_PRODUCTS)}")
    feedback.add_argument("--rating", type=int, help="1 to 5")
    feedback.add_argument("--text", help="Your feedback")
    feedback.set_defaults(func=cmd_feedback)

    cart_parser = subparsers.add_parser("cart", help="Show or change the cart")
    cart_parser.set_defaults(func=cmd_cart, cart_command="show")
    cart_sub = cart_parser.add_subparsers(dest="cart_command")
    cart_sub.add_parser("show")
    add = cart_sub.add_parser("add")
    add.add_argument("--product", default=catalog.PRODUCT_ID)
    add.add_argument("--quantity", type=int, default=1)
    remove = cart_sub.add_parser("remove")
    remove.add_argument("--product", default=catalog.PRODUCT_ID)
    set_qty = cart_sub.add_parser("set")
    set_qty.add_argument("quantity", type=int)
    set_qty.add_argument("--product", default=catalog.PRODUCT_ID)
    cart_sub.add_parser("clear")
    discount = cart_sub.add_parser("discount")
    discount.add_argument("code")

    register = subparsers.add_parser("register", help="Create an account")
    register.add_argument("--email", required=True)
    register.add_argument("--password", required=True)
    register.add_argument("--display-name")
    register.set_defaults(func=cmd_register)

    sign_in = subparsers.add_parser("sign-in", help="Start a session")
    sign_in.add_argument("--email", required=True)
    sign_in.add_argument("--password", required=True)
    sign_in.set_defaults(func=cmd_sign_in)

    subparsers.add_parser("sign-out", help="End the session").set_defaults(func=cmd_sign_out)
    subparsers.add_parser("whoami", help="Show the signed-in account").set_defaults(func=cmd_whoami)

    checkout = subparsers.add_parser("checkout", help="Place orders for everything in the cart")
    checkout.add_argument("--fullname", default="")
    checkout.add_argument("--phone", default="")
    checkout.add_argument("--address", default="")
    checkout.add_argument("--alternate-address")
    checkout.add_argument("--city")
    checkout.add_argument("--state")
    checkout.add_argument("--zip-code")
    checkout.add_argument("--payment-method", choices=PAYMENT_METHODS, default="cod")
    checkout.set_defaults(func=cmd_checkout)

    orders = subparsers.add_parser("orders", help="Your order history")
    orders.add_argument("--status")
    orders.set_defaults(func=cmd_orders)

    track = subparsers.add_parser("track", help="Look up an order by tracking number and phone")
    track.add_argument("tracking_number")
    track.add_argument("phone")
    track.add_argument("--watch", action="store_true", help="Keep polling until the order settles")
    track.add_argument("--interval", type=float, default=30.0)
    track.add_argument("--backoff", type=float, default=1.0)
    track.add_argument("--max-interval", type=float, default=300.0)
    track.set_defaults(func=cmd_track)

    admin = subparsers.add_parser("admin", help="Admin dashboard (admin accounts only)")
    admin.set_defaults(func=cmd_admin)
    admin_sub = admin.add_subparsers(dest="admin_command", required=True)
    admin_orders = admin_sub.add_parser("orders")
    admin_orders.add_argument("--search")
    admin_users = admin_sub.add_parser("users")
    admin_users.add_argument("--search")
    update = admin_sub.add_parser("update")
    update.add_argument("order_id")
    update.add_argument("--status")
    update.add_argument("--tracking-number")
    update.add_argument("--quantity", type=int)
    update.add_argument("--phone")
    update.add_argument("--address")
    delete_order = admin_sub.add_parser("delete-order")
    delete_order.add_argument("order_id")
    delete_user = admin_sub.add_parser("delete-user")
    delete_user.add_argument("user_id")
    export = admin_sub.add_parser("export")
    export.add_argument("path", nargs="?", default="orders.xlsx")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        level="DEBUG" if args.verbose else "WARNING",
        log_dir=STATE_DIR / "logs",
        log_file_prefix="sasya-cli",
    )

    ctx = Context(api_url=args.api_url, storage_path=args.storage)
    try:
        args.func(args, ctx)
    except StorefrontError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
