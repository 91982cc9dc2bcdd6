"""Mapper for User ORM ↔ Domain conversion."""

from enrollment.domain.identity.entities.user import User, UserId
from enrollment.infrastructure.models import User as UserORM


class UserMapper:
    """Mapper for User ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: UserORM) -> User:
        """Convert ORM model to domain entity."""
        return User.create_with_id(
            id=UserId(orm_model.id),
            first_name=orm_model.first_name,
            last_name=orm_model.last_name,
            email=orm_model.email,
            created_at=orm_model.created_at,
        )

    def to_orm(self, domain_entity: User) -> UserORM:
        """Convert domain entity to a new ORM model."""
        return UserORM(
            id=domain_entity.id.value,
            first_name=domain_entity.first_name,
            last_name=domain_entity.last_name,
            email=domain_entity.email,
        )
