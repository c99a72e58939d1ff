from .user import user
from .ticket import ticket
from .flight import flight
from .visa_type import visa_type
from .employee_visa import employee_visa

__all__ = ["user", "ticket", "flight", "visa_type", "employee_visa"]
