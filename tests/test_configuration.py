import json

import pytest

from configuration import (REFLECTORS, ROTORS, create_machine, create_plug_board, create_reflector,
                           create_rotator_group, load_configuration, parse_pairs, permutation_from_swaps,
                           permutation_from_wiring)
from errors import EnigmaError, InvalidConfiguration, InvalidPermutation, InvalidPlugBoard, InvalidReflector, InvalidRotator
from letters import ALPHABET, Letter


ADJACENT_PAIRS = "AB CD EF GH IJ KL MN OP QR ST UV WX YZ"


def test_parse_pairs():
  assert parse_pairs("ab Cd") == [(0, 1), (2, 3)]
  assert parse_pairs([["a", "b"], "CD"]) == [(0, 1), (2, 3)]
  assert parse_pairs("") == []
  assert parse_pairs(None) == []


@pytest.mark.parametrize("value", ["A1", "ABC", [["a", "7"]], "A"])
def test_parse_pairs_rejects_bad_input(value):
  with pytest.raises(InvalidConfiguration):
    parse_pairs(value)


def test_permutation_from_swaps_is_sequential():
  perm = permutation_from_swaps("AB BC")
  assert perm.max_cycle_len() == 3


def test_permutation_from_wiring():
  perm = permutation_from_wiring(ROTORS["I"])
  assert perm.map(0) == Letter.from_char("E").value
  assert permutation_from_wiring(ALPHABET.lower()) == permutation_from_wiring(ALPHABET)
  with pytest.raises(InvalidPermutation):
    permutation_from_wiring("A" + ALPHABET[1:-1] + "A")
  with pytest.raises(InvalidConfiguration):
    permutation_from_wiring(ALPHABET[:-1] + "?")
  with pytest.raises(InvalidConfiguration):
    permutation_from_wiring(["A", "B"])


def test_load_configuration_from_string_and_file(tmp_path):
  configuration = {"Rotors": "I II III", "Reflector": "B"}
  assert load_configuration(json.dumps(configuration)) == configuration
  path = tmp_path / "machine.json"
  path.write_text(json.dumps(configuration))
  assert load_configuration(str(path)) == configuration
  assert load_configuration(configuration) is configuration


def test_load_configuration_errors():
  with pytest.raises(InvalidConfiguration):
    load_configuration("{not json")
  with pytest.raises(InvalidConfiguration):
    load_configuration("[1, 2, 3]")


def test_plug_board():
  board = create_plug_board({"Plugboard": "AV BS"})
  assert board.map(Letter.from_char("a")) == "v"
  assert board.map(Letter.from_char("s")) == "b"
  assert board.map(Letter.from_char("c")) == "c"
  identity = create_plug_board({})
  assert identity.map(Letter.from_char("a")) == "a"
  with pytest.raises(InvalidPlugBoard):
    create_plug_board({"Plugboard": "AB BC"})


@pytest.mark.parametrize("value", ["B", "b", REFLECTORS["B"], ADJACENT_PAIRS, ADJACENT_PAIRS.split()])
def test_reflector_forms(value):
  reflector = create_reflector({"Reflector": value})
  mapped = reflector.map(Letter.from_char("a"))
  if value in ("B", "b", REFLECTORS["B"]):
    assert mapped == "y"
  else:
    assert mapped == "b"


def test_reflector_errors():
  with pytest.raises(InvalidConfiguration):
    create_reflector({})
  with pytest.raises(InvalidReflector):
    create_reflector({"Reflector": "AB CD"})


def test_rotor_group_forms():
  group = create_rotator_group({"Rotors": "I ii III", "Key": "BCD"})
  assert group.offsets == (1, 2, 3)
  assert group.rotators[1].wiring == permutation_from_wiring(ROTORS["II"])
  group = create_rotator_group({"Rotors": [ROTORS["V"], "IV", ALPHABET], "Offsets": [0, 5, 25]})
  assert group.offsets == (0, 5, 25)
  assert create_rotator_group({"Rotors": "I II III"}).offsets == (0, 0, 0)


@pytest.mark.parametrize("configuration", [
  {},
  {"Rotors": "I II"},
  {"Rotors": "I II III", "Key": "AB"},
  {"Rotors": "I II III", "Key": "A1B"},
  {"Rotors": "I II III", "Offsets": [0, 0, 26]},
  {"Rotors": "I II III", "Key": "AAA", "Offsets": [0, 0, 0]},
])
def test_rotor_group_errors(configuration):
  with pytest.raises(InvalidConfiguration):
    create_rotator_group(configuration)


def test_unknown_rotor_name():
  with pytest.raises(EnigmaError):
    create_rotator_group({"Rotors": "I II IX"})


def test_rotor_wiring_of_wrong_size():
  with pytest.raises(InvalidRotator):
    create_rotator_group({"Rotors": ["I", "II", ALPHABET[:-1]]})


def test_create_machine():
  machine = create_machine(json.dumps({"Rotors": [ALPHABET]*3, "Reflector": ADJACENT_PAIRS}))
  assert machine.map_text("ab") == "BA"
  machine = create_machine({"Rotors": "I II III", "Reflector": "B", "Plugboard": "AV BS CG", "Key": "WXC"})
  ciphertext = machine.map_text("Hello World")
  machine.set_key("WXC")
  assert machine.map_text(ciphertext) == "HELLOWORLD"


def test_named_rotor_i():
  assert ROTORS["I"] == "EKMFLGDQVZNTOWYHXUSPAIBRCJ"
  machine = create_machine({"Rotors": "I II III", "Reflector": "B", "Plugboard": "AV BS CG DL FU HZ", "Key": "WXC"})
  assert len(machine.map_text("Hello World")) == 10
