import functools

from errors import LetterOutOfRange


ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ALPHABET_SIZE = len(ALPHABET)
LETTER_VALUE_MAX = ALPHABET_SIZE - 1


def is_letter(char):
  return len(char) == 1 and char.isascii() and char.isalpha()


@functools.total_ordering
class Letter:
  """One of the 26 Latin letters, held as its index 0 (A) to 25 (Z)."""

  __slots__ = ("value",)

  def __init__(self, value):
    if not isinstance(value, int) or value < 0 or value > LETTER_VALUE_MAX:
      raise LetterOutOfRange("letter value " + repr(value) + " is out of range")
    self.value = value

  @classmethod
  def from_value(cls, value):
    return cls(value)

  @classmethod
  def from_char(cls, char):
    if not isinstance(char, str) or not is_letter(char):
      raise LetterOutOfRange(repr(char) + " is not an ASCII letter")
    return cls(ord(char.upper()) - ord("A"))

  @classmethod
  def from_byte(cls, byte):
    return cls.from_char(chr(byte))

  def into_char(self):
    return ALPHABET[self.value]

  def to_byte(self):
    return ord(ALPHABET[self.value])

  def __int__(self):
    return self.value

  def __index__(self):
    return self.value

  def __str__(self):
    return self.into_char()

  def __repr__(self):
    return "Letter(" + repr(self.into_char()) + ")"

  def __eq__(self, other):
    if isinstance(other, Letter):
      return self.value == other.value
    if isinstance(other, str):
      return len(other) == 1 and self.into_char() == other.upper()
    return NotImplemented

  def __lt__(self, other):
    if isinstance(other, Letter):
      return self.value < other.value
    if isinstance(other, str) and is_letter(other):
      return self.into_char() < other.upper()
    return NotImplemented

  def __hash__(self):
    return hash(self.value)


def letters_of(text):
  return [Letter.from_char(char) for char in text if is_letter(char)]


def letters_to_text(letters):
  return "".join(letter.into_char() for letter in letters)
