"""Step definitions for cart scenarios."""

import asyncio

import pytest
from pytest_bdd import given, parsers, then, when
from storefront.cart import Cart
from storefront.models import CartItem
from storefront.storage import CartStorage


@pytest.fixture()
def products():
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart", target_fixture="cart")
def empty_cart(local_storage):
    return Cart(CartStorage(local_storage))


@given(parsers.cfparse('product "{product_id}" priced at {price:d} with a limit of {limit:d} per cart'))
def product_with_limit(products, product_id, price, limit):
    products[product_id] = CartItem(id=product_id, name=f"Product {product_id}", price=float(price), max_quantity=limit)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('{quantity:d} of "{product_id}" are added'))
def add_product(cart, products, quantity, product_id):
    cart.add_item(products[product_id], quantity)


@when(parsers.cfparse('the quantity of "{product_id}" is set to {quantity:d}'))
def set_quantity(cart, product_id, quantity):
    cart.update_quantity(product_id, quantity)


@when(parsers.cfparse('the discount code "{code}" is applied'))
def apply_code(cart, code):
    asyncio.run(cart.apply_discount(code))


@when("the cart is reopened from storage", target_fixture="cart")
def reopen_cart(local_storage):
    return Cart(CartStorage(local_storage))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the cart holds {quantity:d} of "{product_id}"'))
def cart_holds(cart, quantity, product_id):
    assert cart.get_item_quantity(product_id) == quantity


@then(parsers.cfparse('"{product_id}" is not in the cart'))
def not_in_cart(cart, product_id):
    assert not cart.is_item_in_cart(product_id)


@then(parsers.cfparse("the cart total is {total:d}"))
def cart_total(cart, total):
    assert cart.total_price == float(total)


@then(parsers.cfparse("the amount payable is {amount:d}"))
def amount_payable(cart, amount):
    assert cart.final_price == pytest.approx(float(amount))


@then(parsers.cfparse('the cart error is "{message}"'))
def cart_error(cart, message):
    assert cart.error == message
