from models import Cart


def make_line(line_id, product_id, quantity):
    """Cart line dict; product_id=None gives merchandise without a product."""
    merchandise = {"product": {"id": product_id}} if product_id is not None else {}
    return {"id": line_id, "quantity": quantity, "merchandise": merchandise}


def make_cart(*lines):
    return Cart.model_validate({"lines": [make_line(*line) for line in lines]})
