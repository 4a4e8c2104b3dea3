"""Emergency contact service.

Maintains the primary contact invariant: once an employee has at least one
emergency contact, exactly one of them is primary.

Every mutation first locks the owning employee row (``SELECT ... FOR
UPDATE``) and then re-reads the contact set, so checks and writes for one
employee are serialized within the request transaction. Mutations for
different employees never contend.
"""

import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from compliance_api.exceptions import (
    EmergencyContactNotFoundError,
    EmployeeNotFoundError,
    InvalidArgumentError,
    PrimaryContactRequiredError,
)
from compliance_api.models.dto.emergency_contact import (
    EmergencyContactCreate,
    EmergencyContactUpdate,
)
from compliance_api.models.orm.emergency_contact import EmergencyContactORM
from compliance_api.models.orm.employee import EmployeeORM
from compliance_api.repositories.emergency_contact_repository import EmergencyContactRepository
from compliance_api.repositories.employee_repository import EmployeeRepository
from compliance_api.utils.validation import require_text

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "relationship", "phone")


class EmergencyContactService:
    """Service for emergency contacts and the primary contact invariant."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize service with database session."""
        self.session = session
        self.employee_repo = EmployeeRepository(session)
        self.contact_repo = EmergencyContactRepository(session)

    async def _lock_employee(self, employee_id: UUID) -> EmployeeORM:
        """Lock the employee row that owns a contact set.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        employee = await self.employee_repo.get_for_update(employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)
        return employee

    async def _lock_contact(self, contact_id: UUID) -> EmergencyContactORM | None:
        """Lock a contact's employee and return the contact as of the lock."""
        contact = await self.contact_repo.get_by_id(contact_id)
        if contact is None:
            return None
        await self._lock_employee(contact.employee_id)
        return await self.contact_repo.get_current(contact_id)

    async def list_by_employee(self, employee_id: UUID) -> list[EmergencyContactORM]:
        """List an employee's contacts, primary first then by name.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if await self.employee_repo.get_by_id(employee_id) is None:
            raise EmployeeNotFoundError(employee_id)
        return await self.contact_repo.get_by_employee(employee_id)

    async def get_primary(self, employee_id: UUID) -> EmergencyContactORM | None:
        """Get an employee's primary contact, None if they have no contacts.

        Raises:
            EmployeeNotFoundError: If the employee does not exist
        """
        if await self.employee_repo.get_by_id(employee_id) is None:
            raise EmployeeNotFoundError(employee_id)
        return await self.contact_repo.get_primary(employee_id)

    async def create(self, employee_id: UUID, data: EmergencyContactCreate) -> EmergencyContactORM:
        """Create a contact.

        A contact created as primary demotes the current primary. A contact
        created while the employee has no primary becomes primary regardless
        of the requested flag.

        Args:
            employee_id: Owning employee UUID
            data: Contact fields

        Returns:
            Created contact

        Raises:
            InvalidArgumentError: If a required field is blank
            EmployeeNotFoundError: If the employee does not exist
        """
        name = require_text(data.name, "name")
        relationship = require_text(data.relationship, "relationship")
        phone = require_text(data.phone, "phone")

        await self._lock_employee(employee_id)

        make_primary = data.is_primary
        if make_primary:
            await self.contact_repo.clear_primary(employee_id)
        elif await self.contact_repo.count_primary(employee_id) == 0:
            make_primary = True

        contact = await self.contact_repo.create(
            employee_id=employee_id,
            name=name,
            relationship_type=relationship,
            phone=phone,
            email=data.email,
            address=data.address,
            is_primary=make_primary,
        )
        logger.info("Emergency contact %s created (primary=%s)", contact.id, make_primary)
        return contact

    async def update(self, contact_id: UUID, data: EmergencyContactUpdate) -> EmergencyContactORM:
        """Update a contact. Only fields present in ``data`` change.

        Setting ``is_primary`` to true demotes every sibling and is a no-op
        on a contact that is already primary. Setting it to false on the
        employee's only primary contact is refused without any write.

        Args:
            contact_id: Contact UUID
            data: Fields to change

        Returns:
            Updated contact

        Raises:
            InvalidArgumentError: If a required field is blank or null
            EmergencyContactNotFoundError: If the contact does not exist
            PrimaryContactRequiredError: If the last primary would be unset
        """
        fields = data.model_dump(exclude_unset=True)
        for field in REQUIRED_FIELDS:
            if field in fields:
                fields[field] = require_text(fields[field], field)
        if "is_primary" in fields and fields["is_primary"] is None:
            raise InvalidArgumentError("is_primary cannot be null", field="is_primary")

        contact = await self._lock_contact(contact_id)
        if contact is None:
            raise EmergencyContactNotFoundError(contact_id)

        if "relationship" in fields:
            fields["relationship_type"] = fields.pop("relationship")

        is_primary = fields.pop("is_primary", None)
        if is_primary is True and not contact.is_primary:
            await self.contact_repo.clear_primary(contact.employee_id, exclude_id=contact.id)
            fields["is_primary"] = True
        elif is_primary is False and contact.is_primary:
            others = await self.contact_repo.count_primary(contact.employee_id, exclude_id=contact.id)
            if others == 0:
                logger.info("Refused to unset last primary contact %s", contact.id)
                raise PrimaryContactRequiredError(contact.employee_id, contact.id)
            fields["is_primary"] = False

        if not fields:
            return contact
        return await self.contact_repo.apply(contact, **fields)

    async def delete(self, contact_id: UUID) -> bool:
        """Delete a contact.

        When the primary contact is deleted, the oldest remaining contact is
        promoted so the invariant still holds. Deleting the last contact
        leaves the employee with none.

        Args:
            contact_id: Contact UUID

        Returns:
            True if deleted, False if not found
        """
        contact = await self._lock_contact(contact_id)
        if contact is None:
            return False

        employee_id = contact.employee_id
        was_primary = contact.is_primary
        await self.session.delete(contact)
        await self.session.flush()

        if was_primary:
            successor = await self.contact_repo.get_oldest(employee_id)
            if successor is not None:
                await self.contact_repo.apply(successor, is_primary=True)
                logger.info("Promoted contact %s to primary after deletion", successor.id)
        return True
