import pytest

from components import PlugBoard, Reflector, Rotator, RotatorGroup
from configuration import permutation_from_swaps
from errors import InvalidRotator, LetterOutOfRange
from letters import ALPHABET, ALPHABET_SIZE, Letter
from machine import POSITIONS, CipherMachine, key_to_position, offsets_to_position, position_to_key, position_to_offsets
from permutation import Permutation


def identity_group():
  return RotatorGroup([Rotator.new(Permutation.identity(ALPHABET_SIZE), 0) for _ in range(3)])


@pytest.fixture
def inert_machine(pairs_reflector):
  return CipherMachine(PlugBoard.identity(), identity_group(), pairs_reflector)


@pytest.fixture
def machine(historical_rotors, reflector_b):
  plug_board = PlugBoard.from_perm(permutation_from_swaps("AV BS CG DL FU HZ"))
  return CipherMachine(plug_board, historical_rotors, reflector_b)


def test_inert_rotors_show_the_reflector(inert_machine):
  assert inert_machine.map_text("A") == "B"
  inert_machine.set_position(0)
  assert inert_machine.map_text("B") == "A"
  assert inert_machine.map_text("Hello, World!") == "GFKKPXPQKC"


def test_static_map_is_an_involution(machine):
  for position in (0, 1, 25, 26, 677, POSITIONS - 1):
    machine.set_position(position)
    for char in ALPHABET:
      letter = Letter.from_char(char)
      mapped = machine.map_letter_static(letter)
      assert mapped != letter
      assert machine.map_letter_static(mapped) == letter
    assert machine.position == position


def test_static_permutation(machine):
  machine.set_position(1234)
  perm = machine.static_permutation()
  assert perm.is_involution()
  assert perm.fixed_points() == []
  assert perm.map(7) == machine.map_letter_static(Letter(7)).value


def test_map_letter_advances_after_mapping(machine):
  letter = Letter.from_char("e")
  expected = machine.map_letter_static(letter)
  assert machine.map_letter(letter) == expected
  assert machine.offsets == (1, 0, 0)


def test_map_text_drops_non_letters(machine):
  output = machine.map_text("ab, c!\n1d")
  assert len(output) == 4
  assert output.isupper()
  assert machine.position == 4


def test_map_text_round_trip(machine):
  machine.set_key("QEV")
  ciphertext = machine.map_text("Attack at dawn")
  machine.set_key("QEV")
  assert machine.map_text(ciphertext) == "ATTACKATDAWN"


def test_map_text_uses_successive_positions(machine):
  machine.set_position(POSITIONS - 2)
  expected = []
  for position in (POSITIONS - 2, POSITIONS - 1, 0):
    probe = machine.clone()
    probe.set_position(position)
    expected.append(probe.map_letter_static(Letter(0)).into_char())
  assert machine.map_text("aaa") == "".join(expected)


def test_clone_is_independent(machine):
  clone = machine.clone()
  clone.advance()
  assert machine.position == 0
  assert clone.position == 1


def test_position_helpers():
  assert position_to_offsets(0) == (0, 0, 0)
  assert position_to_offsets(27) == (1, 1, 0)
  assert position_to_offsets(POSITIONS) == (0, 0, 0)
  assert offsets_to_position((1, 1, 0)) == 27
  assert position_to_key(27) == "BBA"
  assert key_to_position("bba") == 27
  for position in (0, 1, 700, POSITIONS - 1):
    assert offsets_to_position(position_to_offsets(position)) == position
    assert key_to_position(position_to_key(position)) == position


def test_bad_keys():
  with pytest.raises(InvalidRotator):
    key_to_position("AB")
  with pytest.raises(LetterOutOfRange):
    key_to_position("A1B")
