"""Static storefront content: the product on sale, the about/contact copy and
the feedback page."""

from storefront.models import CartItem

PRODUCT_ID = "sasya-mantra-herbal-hair-oil"

PRODUCT = CartItem(
    id=PRODUCT_ID,
    name="Sasya Mantra Herbal Hair Growth Oil",
    price=100.0,
    quantity=1,
    max_quantity=5,
    image="/images/herbal-hair-oil.jpg",
    variant="100 ml",
)

PRODUCT_DESCRIPTION = (
    "A herbal blend for stronger, healthier hair, made from carefully sourced "
    "natural ingredients. 100 ml bottle."
)

PRODUCTS = [PRODUCT]

ABOUT = """\
Sasya Mantra is a story of heritage, care and the timeless power of nature.

Sasya means plants, herbs and natural growth. Mantra means a sacred chant,
formula or powerful message. Together, Sasya Mantra means "the sacred formula
of nature": authentic herbal purity brought into modern life.

Our promise: pure, safe and effective herbal products, made with honesty and
authentic ingredients."""

CONTACT = {
    "Address": "123 Herbal Lane, Green Valley, Mumbai 400001, India",
    "Phone": "+91 98765 43210",
    "Email": "info@sasyamantra.com",
    "Business Hours": "Mon - Fri: 9:00 AM - 6:00 PM",
}

SHIPPING_NOTE = "We ship within India in 24-48 hours; delivery takes 3-5 business days."


def find_product(product_id: str) -> CartItem | None:
    for product in PRODUCTS:
        if product.id == product_id:
            return product
    return None


FEEDBACK_INTRO = (
    "Your Feedback Matters. Help us improve our products and services. "
    "Share your experience with Sasya Mantra."
)

FEEDBACK_STATS = [
    ("Satisfied Customers", "98%"),
    ("Average Rating", "4.8"),
    ("Total Reviews", "1,234"),
    ("5-Star Reviews", "89%"),
]

# Choices for the "Product Used" field of the feedback form
FEEDBACK_PRODUCTS = {
    "herbal-hair-growth-oil": "Herbal Hair Growth Oil",
    "other": "Other",
}

TESTIMONIALS = [
    {
        "name": "Anjali P.",
        "rating": 5,
        "product": "Herbal Hair Growth Oil",
        "feedback": "Excellent product! My hair has never looked better.",
        "date": "2 days ago",
    },
    {
        "name": "Vikram S.",
        "rating": 5,
        "product": "Herbal Hair Growth Oil",
        "feedback": "Natural ingredients really work. Highly recommended!",
        "date": "1 week ago",
    },
    {
        "name": "Sunita R.",
        "rating": 4,
        "product": "Herbal Hair Growth Oil",
        "feedback": "Good quality product. Seeing positive results.",
        "date": "2 weeks ago",
    },
]
