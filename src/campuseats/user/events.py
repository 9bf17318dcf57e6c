"""Domain events for the User aggregate and its loyalty ledger."""

from protean.fields import DateTime, Float, Identifier, String

from campuseats.domain import campuseats


@campuseats.event(part_of="User")
class UserRegistered:
    """A student or staff member was added to the platform."""

    __version__ = 1

    user_id: Identifier(required=True)
    email: String(required=True)
    full_name: String(required=True)
    role: String(required=True)
    registered_at: DateTime(required=True)


@campuseats.event(part_of="User")
class LoyaltyPointsEarned:
    """Points were credited, either by order completion or by a staff award."""

    __version__ = 1

    user_id: Identifier(required=True)
    transaction_id: Identifier(required=True)
    points: Float(required=True)
    order_id: Identifier()
    balance: Float(required=True)


@campuseats.event(part_of="User")
class LoyaltyPointsRedeemed:
    """Points were spent on a discount or a loyalty-funded payment."""

    __version__ = 1

    user_id: Identifier(required=True)
    transaction_id: Identifier(required=True)
    points: Float(required=True)
    order_id: Identifier()
    balance: Float(required=True)


@campuseats.event(part_of="User")
class LoyaltyPointsAdjusted:
    __version__ = 1

    user_id: Identifier(required=True)
    transaction_id: Identifier(required=True)
    points: Float(required=True)
    balance: Float(required=True)
