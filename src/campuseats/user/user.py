"""User aggregate root with its LoyaltyTransaction ledger."""

import re
from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from campuseats.domain import campuseats
from campuseats.errors import BusinessRuleViolation, LedgerOutOfBalance
from campuseats.utils import money

_PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")


class UserRole(Enum):
    STUDENT = "Student"
    STAFF = "Staff"
    MANAGER = "Manager"


class LoyaltyTransactionKind(Enum):
    EARNED = "Earned"
    REDEEMED = "Redeemed"
    EXPIRED = "Expired"
    ADJUSTED = "Adjusted"


@campuseats.entity(part_of="User")
class LoyaltyTransaction:
    """One signed movement of a user's loyalty points.

    Entries are only ever appended. ``sequence`` numbers them per user so the
    history has a stable newest-first order even when timestamps collide.
    """

    sequence: Integer(required=True, min_value=1)
    points_change: Float(required=True)
    kind: String(required=True, choices=LoyaltyTransactionKind)
    description: String(required=True, max_length=500)
    order_id: Identifier()
    created_at: DateTime(default=datetime.now)


@campuseats.aggregate
class User:
    """A student or staff member who orders food and collects loyalty points.

    The point balance and the ledger that explains it live in the same
    aggregate, so every balance change and its ledger entry are persisted in a
    single write. After each movement the aggregate re-totals its ledger and
    refuses to continue if the total disagrees with the balance.
    """

    email: String(required=True, max_length=100, unique=True)
    full_name: String(required=True, max_length=100)
    phone_number: String(max_length=20)
    student_id: String(max_length=50)
    role: String(choices=UserRole, default=UserRole.STUDENT.value)
    loyalty_points: Float(default=0.0, min_value=0.0)
    transactions: HasMany(LoyaltyTransaction)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if not self.email:
            return
        local, _, domain = self.email.partition("@")
        if not local or "." not in domain or " " in self.email or domain.startswith("."):
            raise ValidationError({"email": ["Invalid email format"]})

    @invariant.post
    def phone_number_must_be_e164(self):
        if self.phone_number and not _PHONE_PATTERN.match(self.phone_number):
            raise ValidationError({"phone_number": ["Invalid phone number format"]})

    @classmethod
    def register(
        cls,
        email,
        full_name,
        phone_number=None,
        student_id=None,
        role=UserRole.STUDENT.value,
        opening_points=0.0,
    ):
        from campuseats.user.events import UserRegistered

        now = datetime.now()
        user = cls(
            email=email.strip().lower(),
            full_name=full_name,
            phone_number=phone_number,
            student_id=student_id,
            role=role,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=user.id,
                email=user.email,
                full_name=full_name,
                role=user.role,
                registered_at=now,
            )
        )
        if opening_points:
            user.adjust_points(opening_points, "Opening balance")
        return user

    # -------------------------------------------------------------------
    # Ledger
    # -------------------------------------------------------------------
    def earn_points(self, points, description, order_id=None):
        from campuseats.user.events import LoyaltyPointsEarned

        entry = self._post(points, LoyaltyTransactionKind.EARNED, description, order_id)
        self.raise_(
            LoyaltyPointsEarned(
                user_id=self.id,
                transaction_id=entry.id,
                points=entry.points_change,
                order_id=order_id,
                balance=self.loyalty_points,
            )
        )
        return entry

    def redeem_points(self, points, description, order_id=None):
        from campuseats.user.events import LoyaltyPointsRedeemed

        if money.to_decimal(points) > money.to_decimal(self.loyalty_points):
            raise BusinessRuleViolation(
                {"points": [f"Insufficient points. You have {self.loyalty_points:g} points."]}
            )

        entry = self._post(-points, LoyaltyTransactionKind.REDEEMED, description, order_id)
        self.raise_(
            LoyaltyPointsRedeemed(
                user_id=self.id,
                transaction_id=entry.id,
                points=-entry.points_change,
                order_id=order_id,
                balance=self.loyalty_points,
            )
        )
        return entry

    def adjust_points(self, points, description):
        from campuseats.user.events import LoyaltyPointsAdjusted

        entry = self._post(points, LoyaltyTransactionKind.ADJUSTED, description)
        self.raise_(
            LoyaltyPointsAdjusted(
                user_id=self.id,
                transaction_id=entry.id,
                points=entry.points_change,
                balance=self.loyalty_points,
            )
        )
        return entry

    @property
    def ledger(self) -> list:
        """Ledger entries, newest first."""
        return sorted(self.transactions, key=lambda t: t.sequence, reverse=True)

    @property
    def total_earned(self) -> float:
        return money.total(t.points_change for t in self.transactions if t.kind == LoyaltyTransactionKind.EARNED.value)

    @property
    def total_redeemed(self) -> float:
        return money.total(
            -t.points_change for t in self.transactions if t.kind == LoyaltyTransactionKind.REDEEMED.value
        )

    def verify_ledger(self):
        ledger_total = money.total(t.points_change for t in self.transactions)
        if ledger_total != money.quantize(self.loyalty_points) or ledger_total < 0:
            raise LedgerOutOfBalance(str(self.id), self.loyalty_points, ledger_total)

    def _post(self, points_change, kind, description, order_id=None):
        points_change = money.quantize(points_change)
        now = datetime.now()

        with atomic_change(self):
            entry = LoyaltyTransaction(
                sequence=len(self.transactions) + 1,
                points_change=points_change,
                kind=kind.value,
                description=description,
                order_id=order_id,
                created_at=now,
            )
            self.add_transactions(entry)
            self.loyalty_points = money.quantize(money.to_decimal(self.loyalty_points) + money.to_decimal(points_change))
            self.updated_at = now

        self.verify_ledger()
        return entry
