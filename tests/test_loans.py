import json
import pytest
from datetime import date, timedelta

from tests.helpers import loan_payload


def create_loan(client, **overrides) -> dict:
    response = client.post("/api/loans", json=loan_payload(**overrides))
    assert response.status_code == 200, response.text
    return response.json()


def post_raw_loan(client, amount_literal: str):
    """Send a loan whose amount is a raw JSON literal such as 1e400 or NaN"""
    body = json.dumps(loan_payload(amount=0)).replace('"amount": 0', f'"amount": {amount_literal}')
    return client.post("/api/loans", content=body, headers={"Content-Type": "application/json"})


class TestLoanCreation:
    """Tests for creating loans"""

    def test_create_loan_success(self, auth_client):
        response = auth_client.post("/api/loans", json=loan_payload(notes="For the roof"))

        assert response.status_code == 200
        loan = response.json()
        assert loan["borrowed_by"] == "Alice"
        assert loan["lender_name"] == "SBI"
        assert loan["loan_source"] == "bank"
        assert loan["amount"] == 50000
        assert loan["date"] == "2024-01-01"
        assert loan["notes"] == "For the roof"
        assert "id" in loan
        assert "created_at" in loan
        assert "updated_at" in loan

    def test_optional_fields_default(self, auth_client):
        loan = create_loan(auth_client)

        assert loan["interest_rate"] is None
        assert loan["notes"] == ""
        assert loan["projection"] is None

    def test_snake_case_payload_accepted(self, auth_client):
        response = auth_client.post(
            "/api/loans",
            json={
                "borrowed_by": "Bob",
                "lender_name": "Village SHG",
                "loan_source": "shg",
                "amount": 2500.5,
                "date": "2024-06-15",
                "interest_rate": 12,
            },
        )

        assert response.status_code == 200
        assert response.json()["loan_source"] == "shg"
        assert response.json()["interest_rate"] == 12

    @pytest.mark.parametrize(
        "field", ["borrowedBy", "lenderName", "loanSource", "amount", "date"]
    )
    def test_missing_required_field(self, auth_client, field):
        payload = loan_payload()
        del payload[field]

        response = auth_client.post("/api/loans", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    @pytest.mark.parametrize("field", ["borrowedBy", "lenderName"])
    @pytest.mark.parametrize("value", ["", "   "])
    def test_blank_required_text(self, auth_client, field, value):
        response = auth_client.post("/api/loans", json=loan_payload(**{field: value}))

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields"}

    def test_invalid_loan_source(self, auth_client):
        response = auth_client.post("/api/loans", json=loan_payload(loanSource="friend"))

        assert response.status_code == 400
        assert "loanSource" in response.json()["error"]

    @pytest.mark.parametrize("amount", [0, -100])
    def test_non_positive_amount_rejected(self, auth_client, amount):
        response = auth_client.post("/api/loans", json=loan_payload(amount=amount))

        assert response.status_code == 400
        assert response.json() == {"error": "Amount must be greater than 0"}

    def test_negative_rate_rejected(self, auth_client):
        response = auth_client.post("/api/loans", json=loan_payload(interestRate=-1))

        assert response.status_code == 400
        assert response.json() == {"error": "Interest rate cannot be negative"}

    @pytest.mark.parametrize("literal", ["1e400", "NaN", "Infinity", "-Infinity"])
    def test_non_finite_amount_rejected(self, auth_client, literal):
        response = post_raw_loan(auth_client, literal)

        assert response.status_code == 400
        assert "amount" in response.json()["error"]
        assert auth_client.get("/api/loans").json() == []

    def test_non_finite_rate_rejected(self, auth_client):
        body = json.dumps(loan_payload(interestRate=0)).replace(
            '"interestRate": 0', '"interestRate": NaN'
        )

        response = auth_client.post(
            "/api/loans", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert "interestRate" in response.json()["error"]

    @pytest.mark.parametrize(
        "overrides",
        [
            {"amount": 1234.567},
            {"interestRate": 12.3456},
        ],
    )
    def test_extra_precision_rejected_not_rounded(self, auth_client, overrides):
        response = auth_client.post("/api/loans", json=loan_payload(**overrides))

        assert response.status_code == 400
        assert auth_client.get("/api/loans").json() == []

    @pytest.mark.parametrize(
        "overrides",
        [
            {"amount": 10**13},
            {"interestRate": 10000},
        ],
    )
    def test_values_too_large_for_column_rejected(self, auth_client, overrides):
        response = auth_client.post("/api/loans", json=loan_payload(**overrides))

        assert response.status_code == 400

    def test_largest_storable_values_accepted(self, auth_client):
        loan = create_loan(auth_client, amount=9999999999999.99, interestRate=9999.999)

        assert loan["amount"] == 9999999999999.99
        assert loan["interest_rate"] == 9999.999

    def test_zero_rate_has_no_projection(self, auth_client):
        loan = create_loan(auth_client, interestRate=0)

        assert loan["interest_rate"] == 0
        assert loan["projection"] is None

    def test_invalid_date_rejected(self, auth_client):
        response = auth_client.post("/api/loans", json=loan_payload(date="not-a-date"))

        assert response.status_code == 400


class TestLoanRetrieval:
    """Tests for listing and reading loans"""

    def test_list_empty(self, auth_client):
        response = auth_client.get("/api/loans")

        assert response.status_code == 200
        assert response.json() == []

    def test_list_newest_first(self, auth_client):
        first = create_loan(auth_client, lenderName="First")
        second = create_loan(auth_client, lenderName="Second")
        third = create_loan(auth_client, lenderName="Third")

        ids = [loan["id"] for loan in auth_client.get("/api/loans").json()]

        assert ids == [third["id"], second["id"], first["id"]]

    def test_filter_by_source(self, auth_client):
        create_loan(auth_client, loanSource="bank")
        shg = create_loan(auth_client, loanSource="shg", lenderName="Women's SHG")

        loans = auth_client.get("/api/loans", params={"loan_source": "shg"}).json()

        assert [loan["id"] for loan in loans] == [shg["id"]]

    def test_filter_by_borrower(self, auth_client):
        create_loan(auth_client, borrowedBy="Alice")
        bob = create_loan(auth_client, borrowedBy="Bob")

        loans = auth_client.get("/api/loans", params={"borrowed_by": "Bob"}).json()

        assert [loan["id"] for loan in loans] == [bob["id"]]

    def test_round_trip(self, auth_client):
        """Reading a loan back gives exactly what was submitted"""
        created = create_loan(auth_client, amount=1234.56, interestRate=12.345, notes="Tractor")

        fetched = auth_client.get(f"/api/loans/{created['id']}").json()

        for field in ["borrowed_by", "lender_name", "loan_source", "amount", "date", "interest_rate", "notes"]:
            assert fetched[field] == created[field]
        assert created["amount"] == 1234.56
        assert created["interest_rate"] == 12.345

    def test_get_nonexistent(self, auth_client):
        response = auth_client.get("/api/loans/99999")

        assert response.status_code == 404
        assert response.json() == {"error": "Loan not found"}


class TestInterestProjection:
    """Projected current amount on loan responses"""

    def test_projection_pinned_with_as_of(self, auth_client):
        loan = create_loan(auth_client, amount=10000, date="2023-01-01", interestRate=10)

        loans = auth_client.get("/api/loans", params={"as_of": "2024-01-01"}).json()

        projection = loans[0]["projection"]
        assert loans[0]["id"] == loan["id"]
        assert projection["current_amount"] == pytest.approx(10999.32, abs=0.01)
        assert projection["interest_accrued"] == pytest.approx(999.32, abs=0.01)
        assert projection["as_of"].startswith("2024-01-01")

    def test_projection_on_single_loan(self, auth_client):
        loan = create_loan(auth_client, amount=1000, date="2020-01-01", interestRate=10)

        fetched = auth_client.get(f"/api/loans/{loan['id']}", params={"as_of": "2024-01-01"}).json()

        assert fetched["projection"]["current_amount"] == pytest.approx(1400.0)

    def test_projection_defaults_to_now(self, auth_client):
        """A loan taken a year ago has accrued interest today"""
        year_ago = (date.today() - timedelta(days=400)).isoformat()

        loan = create_loan(auth_client, amount=10000, date=year_ago, interestRate=12)

        assert loan["projection"]["current_amount"] > 10000
        assert loan["projection"]["interest_accrued"] > 0

    def test_interest_free_loans_have_no_projection(self, auth_client):
        create_loan(auth_client)

        loans = auth_client.get("/api/loans", params={"as_of": "2030-01-01"}).json()

        assert loans[0]["projection"] is None


class TestLoanSummary:
    """Tests for GET /api/loans/summary"""

    def test_empty_summary(self, auth_client):
        summary = auth_client.get("/api/loans/summary").json()

        assert summary["total_loans"] == 0
        assert summary["total_borrowed"] == 0
        assert summary["total_current_amount"] == 0

    def test_totals_by_source(self, auth_client):
        create_loan(auth_client, loanSource="bank", amount=50000)
        create_loan(auth_client, loanSource="bank", amount=20000)
        create_loan(auth_client, loanSource="shg", amount=5000, date="2023-01-01", interestRate=10)

        summary = auth_client.get("/api/loans/summary", params={"as_of": "2024-01-01"}).json()

        assert summary["total_loans"] == 3
        assert summary["total_borrowed"] == 75000
        assert summary["from_banks"] == 70000
        assert summary["from_shg"] == 5000
        assert summary["total_current_amount"] == pytest.approx(
            70000 + 5000 * (1 + 0.10 * 365 / 365.25), abs=0.01
        )


class TestLoanUpdate:
    """Tests for replacing loans"""

    def test_full_replace(self, auth_client):
        loan = create_loan(auth_client, notes="old note", interestRate=5)

        response = auth_client.put(
            f"/api/loans/{loan['id']}",
            json=loan_payload(
                borrowedBy="Bob",
                lenderName="HDFC",
                loanSource="shg",
                amount=1234.5,
                date="2024-02-02",
            ),
        )

        assert response.status_code == 200
        updated = response.json()
        assert updated["id"] == loan["id"]
        assert updated["borrowed_by"] == "Bob"
        assert updated["lender_name"] == "HDFC"
        assert updated["loan_source"] == "shg"
        assert updated["amount"] == 1234.5
        assert updated["date"] == "2024-02-02"
        # Omitted optional fields are cleared, not kept
        assert updated["interest_rate"] is None
        assert updated["notes"] == ""

    def test_update_refreshes_timestamp(self, auth_client):
        loan = create_loan(auth_client)

        updated = auth_client.put(f"/api/loans/{loan['id']}", json=loan_payload()).json()

        assert updated["updated_at"] > loan["updated_at"]
        assert updated["created_at"] == loan["created_at"]

    def test_update_missing_field_rejected(self, auth_client):
        loan = create_loan(auth_client)
        payload = loan_payload()
        del payload["lenderName"]

        response = auth_client.put(f"/api/loans/{loan['id']}", json=payload)

        assert response.status_code == 400
        assert auth_client.get(f"/api/loans/{loan['id']}").json()["lender_name"] == "SBI"

    def test_update_invalid_amount_rejected(self, auth_client):
        loan = create_loan(auth_client)

        response = auth_client.put(f"/api/loans/{loan['id']}", json=loan_payload(amount=0))

        assert response.status_code == 400

    def test_update_nonexistent(self, auth_client):
        response = auth_client.put("/api/loans/99999", json=loan_payload())

        assert response.status_code == 404


class TestLoanDeletion:
    def test_delete(self, auth_client):
        loan = create_loan(auth_client)

        response = auth_client.delete(f"/api/loans/{loan['id']}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert auth_client.get(f"/api/loans/{loan['id']}").status_code == 404

    def test_delete_nonexistent(self, auth_client):
        response = auth_client.delete("/api/loans/99999")

        assert response.status_code == 404
