"""Randomized operation sequences against the Cart Store.

Each sequence is checked against a plain dict model after every step.
Seeds are fixed so failures reproduce.
"""

import random
from decimal import Decimal

import pytest
from faker import Faker
from ordering.cart.cart import CartStore
from ordering.cart.storage import InMemoryCartStorage

SEEDS = [3, 17, 42, 101, 2024]


def _catalogue(fake: Faker, size: int = 6) -> list[dict]:
    return [
        {
            "id": product_id,
            "name": fake.catch_phrase(),
            "price": Decimal(fake.pydecimal(left_digits=3, right_digits=2, positive=True, min_value=1)),
        }
        for product_id in range(1, size + 1)
    ]


def _run(seed: int, steps: int = 60):
    rng = random.Random(seed)
    fake = Faker()
    fake.seed_instance(seed)
    products = _catalogue(fake)

    cart = CartStore(InMemoryCartStorage())
    model: dict[int, int] = {}
    prices = {p["id"]: p["price"] for p in products}

    for _ in range(steps):
        op = rng.choice(["add", "set", "remove", "clear"])
        product = rng.choice(products)
        pid = product["id"]
        if op == "add":
            qty = rng.randint(1, 4)
            cart.add_item(product, qty=qty)
            model[pid] = model.get(pid, 0) + qty
        elif op == "set":
            qty = rng.randint(-1, 5)
            cart.set_quantity(pid, qty)
            if pid in model:
                if qty <= 0:
                    del model[pid]
                else:
                    model[pid] = qty
        elif op == "remove":
            cart.remove_item(pid)
            model.pop(pid, None)
        elif rng.random() < 0.2:
            cart.clear()
            model.clear()

        yield cart, model, prices


@pytest.mark.parametrize("seed", SEEDS)
def test_lines_match_model_after_every_step(seed):
    for cart, model, _ in _run(seed):
        assert {line.product_id: line.quantity for line in cart.lines} == model


@pytest.mark.parametrize("seed", SEEDS)
def test_product_ids_stay_unique_and_quantities_positive(seed):
    for cart, _, _ in _run(seed):
        ids = [line.product_id for line in cart.lines]
        assert len(ids) == len(set(ids))
        assert all(line.quantity >= 1 for line in cart.lines)


@pytest.mark.parametrize("seed", SEEDS)
def test_totals_are_derived_from_lines(seed):
    for cart, model, prices in _run(seed):
        assert cart.total_items() == sum(model.values())
        assert cart.total_amount() == sum((prices[pid] * qty for pid, qty in model.items()), Decimal("0"))


@pytest.mark.parametrize("seed", SEEDS)
def test_setting_zero_is_the_same_as_removing(seed):
    rng = random.Random(seed)
    fake = Faker()
    fake.seed_instance(seed)
    products = _catalogue(fake)

    via_set = CartStore(InMemoryCartStorage())
    via_remove = CartStore(InMemoryCartStorage())
    for product in products:
        qty = rng.randint(1, 3)
        via_set.add_item(product, qty=qty)
        via_remove.add_item(product, qty=qty)

    target = rng.choice(products)["id"]
    via_set.set_quantity(target, 0)
    via_remove.remove_item(target)

    assert via_set.lines == via_remove.lines
