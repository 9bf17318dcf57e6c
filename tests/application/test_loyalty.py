"""Application tests for redeeming, awarding and reading loyalty points."""

import pytest
from protean import current_domain

from campuseats.errors import BusinessRuleViolation, EntityNotFound, ErrorKind, InputInvalid
from campuseats.loyalty.award import AwardPoints
from campuseats.loyalty.queries import get_balance, get_transactions
from campuseats.loyalty.redemption import RedeemPoints
from campuseats.user.user import LoyaltyTransactionKind, User


def _redeem(user_id, points, order_id=None):
    return current_domain.process(RedeemPoints(user_id=user_id, points=points, order_id=order_id), asynchronous=False)


class TestRedeemPoints:
    def test_redeem_hundred_of_five_hundred(self, register_user):
        user_id = register_user(opening_points=500)

        result = _redeem(user_id, 100)

        assert result == {
            "points_redeemed": 100,
            "discount_amount": 10.0,
            "remaining_points": 400.0,
            "message": "Successfully redeemed 100 points for 10.00 RON discount!",
        }
        user = current_domain.repository_for(User).get(user_id)
        assert user.loyalty_points == 400.0
        entry = user.ledger[0]
        assert entry.kind == LoyaltyTransactionKind.REDEEMED.value
        assert entry.points_change == -100.0
        assert entry.description == "Redeemed 100 points for 10.00 RON discount"

    def test_order_reference_is_recorded(self, register_user):
        user_id = register_user(opening_points=100)
        _redeem(user_id, 50, order_id="ord-123")
        entry = current_domain.repository_for(User).get(user_id).ledger[0]
        assert entry.order_id == "ord-123"
        assert entry.description == "Redeemed 50 points for 5.00 RON discount on order"

    def test_low_balance_is_rejected(self, register_user):
        user_id = register_user(opening_points=30)
        with pytest.raises(BusinessRuleViolation) as exc:
            _redeem(user_id, 50)
        assert exc.value.kind == ErrorKind.CONFLICT
        assert exc.value.messages["points"] == ["Minimum 50 points required to redeem"]
        assert current_domain.repository_for(User).get(user_id).loyalty_points == 30.0

    def test_request_below_minimum(self, register_user):
        user_id = register_user(opening_points=200)
        with pytest.raises(BusinessRuleViolation) as exc:
            _redeem(user_id, 49)
        assert exc.value.messages["points"] == ["Minimum 50 points required to redeem"]

    def test_insufficient_points(self, register_user):
        user_id = register_user(opening_points=60)
        with pytest.raises(BusinessRuleViolation) as exc:
            _redeem(user_id, 100)
        assert exc.value.messages["points"] == ["Insufficient points. You have 60 points."]
        user = current_domain.repository_for(User).get(user_id)
        assert user.loyalty_points == 60.0
        assert len(user.transactions) == 1

    @pytest.mark.parametrize(
        "points,message",
        [
            (0, "Points to redeem must be greater than 0"),
            (-10, "Points to redeem must be greater than 0"),
            (10_001, "Cannot redeem more than 10000 points at once"),
        ],
    )
    def test_out_of_range_requests(self, register_user, points, message):
        user_id = register_user(opening_points=500)
        with pytest.raises(InputInvalid) as exc:
            _redeem(user_id, points)
        assert exc.value.messages["points"] == [message]

    def test_unknown_user(self):
        with pytest.raises(EntityNotFound):
            _redeem("nobody", 100)


class TestAwardPoints:
    def test_award_appends_earned_entry(self, register_user):
        user_id = register_user()
        transaction_id = current_domain.process(
            AwardPoints(user_id=user_id, points=25, description="Campus survey bonus"),
            asynchronous=False,
        )
        user = current_domain.repository_for(User).get(user_id)
        [entry] = user.transactions
        assert str(entry.id) == transaction_id
        assert entry.kind == LoyaltyTransactionKind.EARNED.value
        assert user.loyalty_points == 25.0

    def test_award_problems_are_collected(self, register_user):
        user_id = register_user()
        with pytest.raises(InputInvalid) as exc:
            current_domain.process(AwardPoints(user_id=user_id, points=0, description="  "), asynchronous=False)
        assert exc.value.messages == {
            "points": ["Points must be greater than 0"],
            "description": ["Description is required"],
        }


class TestBalanceAndHistory:
    def test_balance_summary(self, register_user):
        user_id = register_user(opening_points=200)
        current_domain.process(AwardPoints(user_id=user_id, points=15, description="Bonus"), asynchronous=False)
        _redeem(user_id, 100)

        balance = get_balance(user_id)
        assert balance == {
            "user_id": user_id,
            "current_points": 115.0,
            "total_earned": 15.0,
            "total_redeemed": 100.0,
            "points_value": 11.5,
        }

    def test_history_is_paged_newest_first(self, register_user):
        user_id = register_user(opening_points=100)
        for n in range(1, 5):
            current_domain.process(AwardPoints(user_id=user_id, points=n, description=f"Bonus {n}"), asynchronous=False)

        first_page = get_transactions(user_id, page=1, page_size=2)
        second_page = get_transactions(user_id, page=2, page_size=2)
        third_page = get_transactions(user_id, page=3, page_size=2)
        empty_page = get_transactions(user_id, page=4, page_size=2)

        assert [t["description"] for t in first_page] == ["Bonus 4", "Bonus 3"]
        assert [t["description"] for t in second_page] == ["Bonus 2", "Bonus 1"]
        assert [t["description"] for t in third_page] == ["Opening balance"]
        assert empty_page == []

    @pytest.mark.parametrize("page,page_size,field", [(0, 20, "page"), (1, 0, "page_size"), (1, 101, "page_size")])
    def test_invalid_paging(self, register_user, page, page_size, field):
        user_id = register_user()
        with pytest.raises(InputInvalid) as exc:
            get_transactions(user_id, page=page, page_size=page_size)
        assert field in exc.value.messages

    def test_unknown_user_balance(self):
        with pytest.raises(EntityNotFound):
            get_balance("nobody")
