"""Lab Portal: laboratory inventories and weekly timetables for colleges."""

__version__ = "1.0.0"
