"""Point redemption: command and handler."""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.errors import BusinessRuleViolation, InputInvalid
from campuseats.loyalty.policy import MAXIMUM_REDEMPTION, MINIMUM_REDEMPTION, discount_for
from campuseats.user.queries import load_user
from campuseats.user.user import User


@campuseats.command(part_of="User")
class RedeemPoints:
    user_id: Identifier(required=True)
    points: Integer(required=True)
    order_id: Identifier()


def _validate(command):
    errors = []
    if command.points <= 0:
        errors.append("Points to redeem must be greater than 0")
    if command.points > MAXIMUM_REDEMPTION:
        errors.append(f"Cannot redeem more than {MAXIMUM_REDEMPTION} points at once")
    if errors:
        raise InputInvalid({"points": errors})


@campuseats.command_handler(part_of=User)
class RedeemPointsHandler:
    @handle(RedeemPoints)
    def redeem_points(self, command):
        """Swap points for a discount.

        Checks run in a fixed order: the user exists, the balance reaches the
        redemption floor, the request reaches the floor, the balance covers the
        request. Returns the redemption summary as a dict.
        """
        _validate(command)
        user = load_user(command.user_id)

        below_minimum = {"points": [f"Minimum {MINIMUM_REDEMPTION} points required to redeem"]}
        if user.loyalty_points < MINIMUM_REDEMPTION:
            raise BusinessRuleViolation(below_minimum)
        if command.points < MINIMUM_REDEMPTION:
            raise BusinessRuleViolation(below_minimum)

        discount = discount_for(command.points)
        description = f"Redeemed {command.points} points for {discount:.2f} RON discount"
        if command.order_id:
            description += " on order"

        user.redeem_points(command.points, description, order_id=command.order_id)
        current_domain.repository_for(User).add(user)

        logger.info(
            "points redeemed",
            user_id=str(user.id),
            points=command.points,
            discount=discount,
            balance=user.loyalty_points,
        )
        return {
            "points_redeemed": command.points,
            "discount_amount": discount,
            "remaining_points": user.loyalty_points,
            "message": f"Successfully redeemed {command.points} points for {discount:.2f} RON discount!",
        }
