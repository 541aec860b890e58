# FILE: medcare/domain/person.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class PersonRole(str, Enum):
    PATIENT = "PATIENT"
    DOCTOR = "DOCTOR"
    STAFF = "STAFF"


@dataclass
class Person:
    """
    One record shape for patients, doctors and staff; `role` says which.
    Role specific fields stay None where they do not apply.
    """
    person_id: str
    name: str
    role: PersonRole
    gender: Optional[str] = None
    date_of_birth: Optional[date] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    # doctors
    specialization: Optional[str] = None
    # patients
    blood_group: Optional[str] = None


def age_of(person: Person, today: date) -> Optional[int]:
    dob = person.date_of_birth
    if dob is None:
        return None
    years = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        years -= 1
    return years


def display_name(person: Person) -> str:
    if person.role == PersonRole.DOCTOR:
        return f"Dr. {person.name}"
    return person.name
