import pytest
from storefront.cart import Cart
from storefront.models import CartItem
from storefront.storage import CartStorage, LocalStorage


@pytest.fixture()
def local_storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture()
def cart(local_storage):
    return Cart(CartStorage(local_storage))


@pytest.fixture()
def oil():
    return CartItem(id="A", name="Herbal Hair Oil", price=100.0, max_quantity=5, variant="100 ml")


@pytest.fixture()
def comb():
    return CartItem(id="B", name="Neem Comb", price=40.0)
