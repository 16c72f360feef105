import pytest

from components import Reflector, Rotator, RotatorGroup
from configuration import REFLECTORS, ROTORS, permutation_from_wiring
from letters import ALPHABET_SIZE
from permutation import PermutationBuilder


def pairs_builder():
  builder = PermutationBuilder(ALPHABET_SIZE)
  for i in range(0, ALPHABET_SIZE, 2):
    builder.swap(i, i + 1)
  return builder


def shift_builder():
  builder = PermutationBuilder(ALPHABET_SIZE)
  for i in range(ALPHABET_SIZE - 1):
    builder.swap(i, i + 1)
  return builder


@pytest.fixture
def pairs_perm():
  return pairs_builder().build()


@pytest.fixture
def shift_perm():
  return shift_builder().build()


@pytest.fixture
def pairs_reflector():
  return Reflector.from_perm(pairs_builder().build())


@pytest.fixture
def historical_rotors():
  return RotatorGroup([Rotator.new(permutation_from_wiring(ROTORS[name]), 0) for name in ("I", "II", "III")])


@pytest.fixture
def reflector_b():
  return Reflector.from_perm(permutation_from_wiring(REFLECTORS["B"]))
