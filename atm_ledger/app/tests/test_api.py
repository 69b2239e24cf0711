from decimal import Decimal
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from ..core.config import Settings, get_settings
from ..core.dependencies import get_ledger
from ..main import app
from ..services import AccountLedger

PIN = {"X-Card-PIN": "1234"}

@pytest.fixture
def client(tmp_path) -> TestClient:
    ledger = AccountLedger()
    settings = Settings(ledger_dir=tmp_path / "ledgers")

    app.dependency_overrides[get_ledger] = lambda: ledger
    app.dependency_overrides[get_settings] = lambda: settings

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def register(client: TestClient, balance: str = "300.30") -> None:
    response = client.post(
        "/accounts",
        json={
            "card_number": 12345678,
            "pin": 1234,
            "holder_name": "Sam Sepiol",
            "initial_balance": balance,
        },
    )
    assert response.status_code == 201


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_register_deposit_withdraw(client: TestClient) -> None:
    response = client.post(
        "/accounts",
        json={
            "card_number": 12345678,
            "pin": 1234,
            "holder_name": "Sam Sepiol",
            "initial_balance": "10.00",
        },
    )
    assert response.status_code == 201
    account = response.json()
    assert account["holder_name"] == "Sam Sepiol"
    assert Decimal(account["balance"]) == Decimal("10")
    assert "pin" not in account

    deposit = client.post(
        "/accounts/12345678/deposit", json={"amount": "123.45"}, headers=PIN
    )
    assert deposit.status_code == 200
    assert Decimal(deposit.json()["balance"]) == Decimal("133.45")

    withdraw = client.post(
        "/accounts/12345678/withdraw", json={"amount": "33.45"}, headers=PIN
    )
    assert withdraw.status_code == 200
    assert Decimal(withdraw.json()["balance"]) == Decimal("100")

    balance = client.get("/accounts/12345678/balance", headers=PIN)
    assert balance.status_code == 200
    assert Decimal(balance.json()["balance"]) == Decimal("100")

    transactions = client.get("/accounts/12345678/transactions", headers=PIN)
    assert transactions.json()["items"] == [
        "Deposit - Amount: $123.45, Updated Balance: $133.45",
        "Withdrawal - Amount: $33.45, Updated Balance: $100.00",
    ]


def test_register_duplicate_returns_409(client: TestClient) -> None:
    register(client)
    response = client.post(
        "/accounts",
        json={"card_number": 12345678, "pin": 1234, "holder_name": "Other"},
    )
    assert response.status_code == 409

    balance = client.get("/accounts/12345678/balance", headers=PIN)
    assert Decimal(balance.json()["balance"]) == Decimal("300.30")


def test_register_requires_holder_name(client: TestClient) -> None:
    response = client.post(
        "/accounts", json={"card_number": 1, "pin": 2, "holder_name": ""}
    )
    assert response.status_code == 422


def test_withdraw_insufficient_funds(client: TestClient) -> None:
    register(client, balance="50.00")

    response = client.post(
        "/accounts/12345678/withdraw", json={"amount": "50.01"}, headers=PIN
    )
    assert response.status_code == 409
    assert response.json()["detail"] == "Insufficient funds for withdrawal"

    balance = client.get("/accounts/12345678/balance", headers=PIN)
    assert Decimal(balance.json()["balance"]) == Decimal("50")


def test_non_positive_amount_rejected(client: TestClient) -> None:
    register(client)

    for route in ("deposit", "withdraw"):
        response = client.post(
            f"/accounts/12345678/{route}", json={"amount": "0"}, headers=PIN
        )
        assert response.status_code == 422

    transactions = client.get("/accounts/12345678/transactions", headers=PIN)
    assert transactions.json()["items"] == []


def test_unknown_account_returns_404(client: TestClient) -> None:
    register(client)
    wrong_pin = {"X-Card-PIN": "9999"}

    assert client.get("/accounts/12345678/balance", headers=wrong_pin).status_code == 404
    assert (
        client.post(
            "/accounts/12345678/deposit", json={"amount": "1"}, headers=wrong_pin
        ).status_code
        == 404
    )
    assert (
        client.post(
            "/accounts/12345678/withdraw", json={"amount": "1"}, headers=wrong_pin
        ).status_code
        == 404
    )
    assert client.get("/accounts/12345678/transactions", headers=wrong_pin).status_code == 404
    assert client.get("/accounts/12345678/ledger", headers=wrong_pin).status_code == 404
    assert client.post("/accounts/12345678/ledger", headers=wrong_pin).status_code == 404


def test_negative_card_number_returns_400(client: TestClient) -> None:
    response = client.get("/accounts/-5/balance", headers=PIN)
    assert response.status_code == 400


def test_missing_pin_header_returns_422(client: TestClient) -> None:
    register(client)
    assert client.get("/accounts/12345678/balance").status_code == 422


def test_render_and_print_ledger(client: TestClient, tmp_path) -> None:
    register(client)
    for route, amount in (
        ("withdraw", "200.40"),
        ("deposit", "40000"),
        ("deposit", "32000"),
    ):
        client.post(f"/accounts/12345678/{route}", json={"amount": amount}, headers=PIN)

    expected = (
        "Name: Sam Sepiol\n"
        "Card Number: 12345678\n"
        "PIN: 1234\n"
        "----------------------------\n"
        "Withdrawal - Amount: $200.40, Updated Balance: $99.90\n"
        "Deposit - Amount: $40000.00, Updated Balance: $40099.90\n"
        "Deposit - Amount: $32000.00, Updated Balance: $72099.90\n"
    )

    rendered = client.get("/accounts/12345678/ledger", headers=PIN)
    assert rendered.status_code == 200
    assert rendered.headers["content-type"].startswith("text/plain")
    assert rendered.text == expected

    printed = client.post("/accounts/12345678/ledger", headers=PIN)
    assert printed.status_code == 201
    path = Path(printed.json()["path"])
    assert path == tmp_path / "ledgers" / "ledger_12345678_1234.txt"
    assert path.read_text() == expected


def test_print_ledger_per_pin_on_shared_card(client: TestClient, tmp_path) -> None:
    for pin, name in ((1, "Checking"), (2, "Savings")):
        client.post(
            "/accounts",
            json={"card_number": 7, "pin": pin, "holder_name": name, "initial_balance": "1"},
        )

    first = client.post("/accounts/7/ledger", headers={"X-Card-PIN": "1"})
    second = client.post("/accounts/7/ledger", headers={"X-Card-PIN": "2"})
    assert first.status_code == second.status_code == 201

    first_path = Path(first.json()["path"])
    second_path = Path(second.json()["path"])
    assert first_path != second_path
    assert first_path.read_text().startswith("Name: Checking\n")
    assert second_path.read_text().startswith("Name: Savings\n")


def test_print_ledger_unknown_account_creates_nothing(client: TestClient, tmp_path) -> None:
    response = client.post("/accounts/12345678/ledger", headers=PIN)
    assert response.status_code == 404
    assert not (tmp_path / "ledgers").exists()
