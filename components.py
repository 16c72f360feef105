import logging

from errors import InvalidPlugBoard, InvalidReflector, InvalidRotator
from letters import ALPHABET_SIZE, Letter
from permutation import Permutation


logger = logging.getLogger(__name__)


def describe_pairs(perm):
  return " ".join(chr(65+i) + chr(65+perm.map(i)) for i in range(perm.n()) if i < perm.map(i))


class PlugBoard:
  def __init__(self, perm):
    if perm.n() != ALPHABET_SIZE:
      raise InvalidPlugBoard("plugboard must permute " + str(ALPHABET_SIZE) + " letters, got " + str(perm.n()))
    if perm.max_cycle_len() > 2:
      raise InvalidPlugBoard("plugboard may only swap pairs of letters, found a cycle of length " + str(perm.max_cycle_len()))
    self.perm = perm

  @classmethod
  def from_perm(cls, perm):
    return cls(perm)

  @classmethod
  def identity(cls):
    return cls(Permutation.identity(ALPHABET_SIZE))

  def map_value(self, value):
    return self.perm.map(value)

  def map(self, letter):
    return Letter(self.perm.map(letter.value))

  def __repr__(self):
    return "<PlugBoard " + describe_pairs(self.perm) + ">"


class Reflector:
  def __init__(self, perm):
    if perm.n() != ALPHABET_SIZE:
      raise InvalidReflector("reflector must permute " + str(ALPHABET_SIZE) + " letters, got " + str(perm.n()))
    fixed = perm.fixed_points()
    if fixed:
      raise InvalidReflector("reflector cannot map a letter to itself: " + "".join(chr(65+i) for i in fixed))
    if perm.max_cycle_len() != 2:
      raise InvalidReflector("reflector must swap pairs of letters, found a cycle of length " + str(perm.max_cycle_len()))
    self.perm = perm

  @classmethod
  def from_perm(cls, perm):
    return cls(perm)

  def map_value(self, value):
    return self.perm.map(value)

  def map(self, letter):
    return Letter(self.perm.map(letter.value))

  def __repr__(self):
    return "<Reflector " + describe_pairs(self.perm) + ">"


class Rotator:
  """A wheel: fixed wiring seen through a rotating offset."""

  def __init__(self, perm, offset=0):
    if perm.n() != ALPHABET_SIZE:
      raise InvalidRotator("rotor wiring must permute " + str(ALPHABET_SIZE) + " letters, got " + str(perm.n()))
    self.wiring = perm
    self.inverse_wiring = perm.inverse()
    self.offset = offset % ALPHABET_SIZE

  @classmethod
  def new(cls, perm, offset=0):
    return cls(perm, offset)

  def set_offset(self, offset):
    self.offset = offset % ALPHABET_SIZE

  def _shift(self, perm, value):
    mapped = perm.map((value + self.offset) % ALPHABET_SIZE)
    if mapped >= self.offset:
      return mapped - self.offset
    return mapped + ALPHABET_SIZE - self.offset

  def forward_value(self, value):
    return self._shift(self.wiring, value)

  def backward_value(self, value):
    return self._shift(self.inverse_wiring, value)

  def map_forward(self, letter):
    return Letter(self.forward_value(letter.value))

  def map_backward(self, letter):
    return Letter(self.backward_value(letter.value))

  def advance(self):
    # False signals the carry into the next wheel.
    self.offset = (self.offset + 1) % ALPHABET_SIZE
    return self.offset != 0

  def __repr__(self):
    return "<Rotator offset=" + str(self.offset) + ">"


class RotatorGroup:
  """Fast, medium and slow wheels stepping like an odometer."""

  def __init__(self, rotators):
    rotators = list(rotators)
    if len(rotators) != 3:
      raise InvalidRotator("rotor group needs exactly 3 rotors, got " + str(len(rotators)))
    self.rotators = rotators
    logger.debug("Rotor group assembled at offsets %s", list(self.offsets))

  @property
  def offsets(self):
    return tuple(rotator.offset for rotator in self.rotators)

  def set_offsets(self, offsets):
    offsets = list(offsets)
    if len(offsets) != 3:
      raise InvalidRotator("rotor group needs exactly 3 offsets, got " + str(len(offsets)))
    for rotator, offset in zip(self.rotators, offsets):
      rotator.set_offset(offset)

  @property
  def position(self):
    fast, medium, slow = self.offsets
    return fast + ALPHABET_SIZE*medium + ALPHABET_SIZE*ALPHABET_SIZE*slow

  def forward_value(self, value):
    for rotator in self.rotators:
      value = rotator.forward_value(value)
    return value

  def backward_value(self, value):
    for rotator in reversed(self.rotators):
      value = rotator.backward_value(value)
    return value

  def map_forward(self, letter):
    return Letter(self.forward_value(letter.value))

  def map_backward(self, letter):
    return Letter(self.backward_value(letter.value))

  def advance(self):
    for rotator in self.rotators:
      if rotator.advance():
        break

  def __repr__(self):
    return "<RotatorGroup offsets=" + str(list(self.offsets)) + ">"
