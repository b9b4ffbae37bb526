"""Simulated checkout flow built as a dependency graph.

Registration must work before login is worth testing, login before the
cart, and both cart and payment before checkout. Run with
``--break-login`` to watch the failure skip everything downstream.
"""

import sys

import testdep

SHOP: dict = {"users": {}, "sessions": set(), "cart": [], "orders": []}
BREAK_LOGIN = "--break-login" in sys.argv


def check_registration(t):
    SHOP["users"]["alice"] = "s3cret"
    t.feature("user_service", "register")
    t.assert_that("user_registered", "alice" in SHOP["users"])


def check_login(t):
    password = "wrong" if BREAK_LOGIN else "s3cret"
    ok = SHOP["users"].get("alice") == password
    if ok:
        SHOP["sessions"].add("alice")
    t.assert_that("login_accepted", ok, critical=True)


def check_cart(t):
    SHOP["cart"].extend([("SKU-001", 29.99), ("SKU-002", 24.99)])
    total = round(sum(price for _, price in SHOP["cart"]), 2)
    t.measure("cart_total", total, "USD")
    t.assert_that("cart_total_correct", total == 54.98)


def check_payment(t):
    t.feature("payment_gateway", "connect")
    t.assert_that("session_active", "alice" in SHOP["sessions"])


def check_checkout(t):
    SHOP["orders"].append(list(SHOP["cart"]))
    t.assert_that("order_created", len(SHOP["orders"]) == 1)


def main() -> int:
    g = testdep.Graph()
    g.name_all([
        (check_registration, "registration"),
        (check_login, "login"),
        (check_cart, "cart"),
        (check_payment, "payment"),
        (check_checkout, "checkout"),
    ])
    g.require(check_login, check_registration)
    g.require(check_cart, check_login)
    g.require(check_payment, check_login)
    g.require(check_checkout, check_cart, check_payment)

    return testdep.run_graph(g)


if __name__ == "__main__":
    sys.exit(main())
