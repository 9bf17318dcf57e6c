"""User registration: command and handler."""

from protean import handle
from protean.fields import Float, String
from protean.utils.globals import current_domain

from campuseats.domain import campuseats, logger
from campuseats.errors import BusinessRuleViolation
from campuseats.user.user import User, UserRole


@campuseats.command(part_of="User")
class RegisterUser:
    """Create a user account; ``opening_points`` seeds the ledger with an Adjusted entry."""

    email: String(required=True, max_length=100)
    full_name: String(required=True, max_length=100)
    phone_number: String(max_length=20)
    student_id: String(max_length=50)
    role: String(max_length=20, default=UserRole.STUDENT.value)
    opening_points: Float(default=0.0, min_value=0.0)


@campuseats.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        email = command.email.strip().lower()
        if repo._dao.query.filter(email=email).all().items:
            raise BusinessRuleViolation({"email": ["Email is already registered"]})

        user = User.register(
            email=email,
            full_name=command.full_name,
            phone_number=command.phone_number,
            student_id=command.student_id,
            role=command.role or UserRole.STUDENT.value,
            opening_points=command.opening_points or 0.0,
        )
        repo.add(user)
        logger.info("user registered", user_id=str(user.id), role=user.role)
        return str(user.id)
