from enum import StrEnum


class BusType(StrEnum):
    SLEEPER = 'SLEEPER'
    CABIN = 'CABIN'
