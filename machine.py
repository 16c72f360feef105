import copy
import logging

from errors import InvalidRotator
from letters import ALPHABET_SIZE, Letter, is_letter
from permutation import Permutation


logger = logging.getLogger(__name__)

POSITIONS = ALPHABET_SIZE**3


def position_to_offsets(position):
  position %= POSITIONS
  return (position % ALPHABET_SIZE, (position // ALPHABET_SIZE) % ALPHABET_SIZE, position // (ALPHABET_SIZE*ALPHABET_SIZE))


def offsets_to_position(offsets):
  fast, medium, slow = (offset % ALPHABET_SIZE for offset in offsets)
  return fast + ALPHABET_SIZE*medium + ALPHABET_SIZE*ALPHABET_SIZE*slow


def position_to_key(position):
  return "".join(Letter(offset).into_char() for offset in position_to_offsets(position))


def key_to_position(key):
  if len(key) != 3:
    raise InvalidRotator("rotor key must be 3 letters, got " + repr(key))
  return offsets_to_position(Letter.from_char(char).value for char in key)


class CipherMachine:
  """Plugboard, three rotors and a reflector wired into one self-reciprocal
  substitution. The rotors step after every letter that is mapped."""

  def __init__(self, plug_board, rotators, reflector):
    self.plug_board = plug_board
    self.rotators = rotators
    self.reflector = reflector
    logger.debug("Machine assembled: %r %r %r", plug_board, rotators, reflector)

  def _static_value(self, value):
    value = self.plug_board.map_value(value)
    value = self.rotators.forward_value(value)
    value = self.reflector.map_value(value)
    value = self.rotators.backward_value(value)
    return self.plug_board.map_value(value)

  def map_letter_static(self, letter):
    return Letter(self._static_value(letter.value))

  def map_letter(self, letter):
    mapped = self.map_letter_static(letter)
    self.rotators.advance()
    return mapped

  def map_text(self, text):
    output = []
    for char in text:
      if not is_letter(char):
        continue
      output.append(self.map_letter(Letter.from_char(char)).into_char())
    return "".join(output)

  def static_permutation(self):
    return Permutation._trusted(self._static_value(value) for value in range(ALPHABET_SIZE))

  def advance(self):
    self.rotators.advance()

  @property
  def offsets(self):
    return self.rotators.offsets

  @property
  def position(self):
    return self.rotators.position

  def set_position(self, position):
    self.rotators.set_offsets(position_to_offsets(position))

  def set_key(self, key):
    self.set_position(key_to_position(key))

  def clone(self):
    return copy.deepcopy(self)

  def __repr__(self):
    return "<CipherMachine key=" + position_to_key(self.position) + ">"
