"""Staff point awards: command and handler."""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.errors import InputInvalid
from campuseats.user.queries import load_user
from campuseats.user.user import User


@campuseats.command(part_of="User")
class AwardPoints:
    user_id: Identifier(required=True)
    points: Float(required=True)
    description: String(max_length=500)
    order_id: Identifier()


@campuseats.command_handler(part_of=User)
class AwardPointsHandler:
    @handle(AwardPoints)
    def award_points(self, command):
        errors = {}
        if command.points <= 0:
            errors["points"] = ["Points must be greater than 0"]
        if not (command.description or "").strip():
            errors["description"] = ["Description is required"]
        if errors:
            raise InputInvalid(errors)

        user = load_user(command.user_id)
        entry = user.earn_points(command.points, command.description.strip(), order_id=command.order_id)
        current_domain.repository_for(User).add(user)

        logger.info("points awarded", user_id=str(user.id), points=entry.points_change, balance=user.loyalty_points)
        return str(entry.id)
