# Import every model so Base.metadata is complete for create_all / Alembic.
from db_models.user import User
from db_models.equipment import Equipment, DepreciationRate, EquipmentDepreciationYear
from db_models.pending_task import PendingTask
from db_models.it_checklist import ITChecklist
from db_models.ticket import Ticket
from db_models.insured_computer import InsuredComputer

__all__ = [
    "User",
    "Equipment",
    "DepreciationRate",
    "EquipmentDepreciationYear",
    "PendingTask",
    "ITChecklist",
    "Ticket",
    "InsuredComputer",
]
