class EnigmaError(Exception):
  pass


class InvalidPermutation(EnigmaError):
  pass


class LetterOutOfRange(EnigmaError, ValueError):
  pass


class InvalidComponentConstraint(EnigmaError):
  pass

class InvalidPlugBoard(InvalidComponentConstraint):
  pass

class InvalidReflector(InvalidComponentConstraint):
  pass

class InvalidRotator(InvalidComponentConstraint):
  pass


class IndicatorError(EnigmaError):
  pass

class MalformedIndicator(IndicatorError):
  pass

class ConflictingIndicator(IndicatorError):
  pass

class InsufficientIndicators(IndicatorError):
  pass


class InvalidConfiguration(EnigmaError):
  pass
