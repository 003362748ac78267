# api/insured/queries.py
from sqlalchemy import select

from db_models.insured_computer import InsuredComputer


def select_all_insured():
    return select(InsuredComputer).order_by(InsuredComputer.created_at.desc(), InsuredComputer.id.desc())


def select_insured_by_serial(serial_number: str):
    return select(InsuredComputer).where(InsuredComputer.serial_number == serial_number)
