import json
import logging
import os

from components import PlugBoard, Reflector, Rotator, RotatorGroup
from errors import InvalidConfiguration
from letters import ALPHABET_SIZE, Letter, is_letter
from machine import CipherMachine, key_to_position, position_to_offsets
from permutation import Permutation, PermutationBuilder


logger = logging.getLogger(__name__)

# Wehrmacht and Kriegsmarine wheel wirings.
ROTORS = {
  "I": "EKMFLGDQVZNTOWYHXUSPAIBRCJ",
  "II": "AJDKSIRUXBLHWTMCQGZNPYFVOE",
  "III": "BDFHJLCPRTXVZNYEIWGAKMUSQO",
  "IV": "ESOVPZJAYQUIRHXLNFTGKDCMWB",
  "V": "VZBRGITYUPSDNHLXAWMJQOFECK",
  "VI": "JPGVOUMFYQBENHZRDKASXLICTW",
  "VII": "NZJHGRCXMYSWBOUFAIVLPEKQDT",
  "VIII": "FKQHTLXOCBJSPDZRAMEWNIUYGV",
}

REFLECTORS = {
  "A": "EJMZALYXVBWFCRQUONTSPIKHGD",
  "B": "YRUHQSLDPXNGOKMIEBFZCWVJAT",
  "C": "FVPJIAOYEDRZXWGCTKUQSBNMHL",
}


def _letter_value(char, what):
  if not isinstance(char, str) or not is_letter(char):
    raise InvalidConfiguration(what + ": " + repr(char) + " is not an ASCII alphabetic character")
  return Letter.from_char(char).value


def parse_pairs(value, what="pairs"):
  if value is None or value == "":
    return []
  if isinstance(value, str):
    value = value.split()
  pairs = []
  for pair in value:
    if len(pair) != 2:
      raise InvalidConfiguration(what + ": " + repr(pair) + " is not a pair of letters")
    pairs.append((_letter_value(pair[0], what), _letter_value(pair[1], what)))
  return pairs


def permutation_from_swaps(pairs, what="pairs"):
  builder = PermutationBuilder(ALPHABET_SIZE)
  for lhs, rhs in parse_pairs(pairs, what):
    builder.swap(lhs, rhs)
  return builder.build()


def permutation_from_wiring(wiring, what="wiring"):
  if not isinstance(wiring, str):
    raise InvalidConfiguration(what + ": expected a string of letters, got " + repr(wiring))
  return Permutation.from_array([_letter_value(char, what) for char in wiring])


def resolve_rotor(value):
  if isinstance(value, str) and value.upper() in ROTORS:
    return ROTORS[value.upper()]
  return value


def resolve_reflector(value):
  if isinstance(value, str) and value.upper() in REFLECTORS:
    return REFLECTORS[value.upper()]
  return value


def load_configuration(source):
  if isinstance(source, dict):
    return source
  if os.path.isfile(source):
    logger.debug("Reading configuration from %s", source)
    with open(source) as f:
      source = f.read()
  try:
    configuration = json.loads(source)
  except json.JSONDecodeError as e:
    raise InvalidConfiguration("configuration is not valid JSON: " + str(e))
  if not isinstance(configuration, dict):
    raise InvalidConfiguration("configuration must be a JSON object")
  return configuration


def create_plug_board(configuration):
  return PlugBoard.from_perm(permutation_from_swaps(configuration.get("Plugboard"), "Plugboard"))


def create_reflector(configuration):
  if "Reflector" not in configuration:
    raise InvalidConfiguration("missing Reflector")
  value = resolve_reflector(configuration["Reflector"])
  if isinstance(value, str) and len(value) == ALPHABET_SIZE and " " not in value:
    perm = permutation_from_wiring(value, "Reflector")
  else:
    perm = permutation_from_swaps(value, "Reflector")
  return Reflector.from_perm(perm)


def rotor_offsets(configuration):
  if "Key" in configuration and "Offsets" in configuration:
    raise InvalidConfiguration("give either Key or Offsets, not both")
  if "Key" in configuration:
    key = configuration["Key"]
    if not isinstance(key, str) or len(key) != 3 or not all(is_letter(char) for char in key):
      raise InvalidConfiguration("Key: " + repr(key) + " must be 3 letters")
    return position_to_offsets(key_to_position(key))
  offsets = configuration.get("Offsets", [0, 0, 0])
  if len(offsets) != 3 or not all(isinstance(offset, int) and 0 <= offset < ALPHABET_SIZE for offset in offsets):
    raise InvalidConfiguration("Offsets: " + repr(offsets) + " must be 3 integers in [0, " + str(ALPHABET_SIZE - 1) + "]")
  return tuple(offsets)


def create_rotator_group(configuration):
  if "Rotors" not in configuration:
    raise InvalidConfiguration("missing Rotors")
  rotors = configuration["Rotors"]
  if isinstance(rotors, str):
    rotors = rotors.split()
  if len(rotors) != 3:
    raise InvalidConfiguration("Rotors: expected 3 rotors, got " + str(len(rotors)))
  offsets = rotor_offsets(configuration)
  group = []
  for n, (rotor, offset) in enumerate(zip(rotors, offsets)):
    perm = permutation_from_wiring(resolve_rotor(rotor), "Rotor " + str(n))
    group.append(Rotator.new(perm, offset))
  return RotatorGroup(group)


def create_machine(configuration):
  configuration = load_configuration(configuration)
  machine = CipherMachine(create_plug_board(configuration), create_rotator_group(configuration), create_reflector(configuration))
  logger.debug("Machine created from configuration %s", json.dumps(configuration))
  return machine
