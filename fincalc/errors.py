"""
Error types raised by the calculation engines.

DomainValidationError is the only error kind the engines raise on bad input.
The session layer catches it and turns it into a user-facing message.
"""


class DomainValidationError(ValueError):
  """
  Input violates a rule of the valuation model.

  Attributes:
    code: Machine-readable rule name (e.g., 'discount_not_above_terminal')
    message: Human-readable explanation of the violated rule
  """

  def __init__(self, message: str, code: str = 'invalid_input'):
    super().__init__(message)
    self.message = message
    self.code = code

  def __str__(self) -> str:
    return self.message
