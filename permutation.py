"""Permutations over {0, ..., n-1}.

A permutation is stored as the list of images of 0, 1, ..., n-1. Instances are
immutable; use PermutationBuilder to assemble one from pairwise swaps, the way
plugboard and reflector wiring sheets are written down.
"""

from errors import InvalidPermutation


MAX_SIZE = 255


class Permutation:
  __slots__ = ("_perm",)

  def __init__(self, values):
    values = list(values)
    if len(values) > MAX_SIZE:
      raise InvalidPermutation("permutation has " + str(len(values)) + " entries, at most " + str(MAX_SIZE) + " allowed")
    n = len(values)
    seen = [False]*n
    for value in values:
      if not isinstance(value, int) or value < 0 or value >= n:
        raise InvalidPermutation("entry " + repr(value) + " is out of range for size " + str(n))
      if seen[value]:
        raise InvalidPermutation("entry " + str(value) + " appears more than once")
      seen[value] = True
    self._perm = tuple(values)

  @classmethod
  def identity(cls, n):
    return cls._trusted(range(n))

  @classmethod
  def from_array(cls, values):
    return cls(values)

  @classmethod
  def _trusted(cls, values):
    # Only for values that are a bijection by construction.
    perm = object.__new__(cls)
    perm._perm = tuple(values)
    return perm

  def n(self):
    return len(self._perm)

  def map(self, element):
    return self._perm[element]

  def inverse(self):
    inverse = [0]*len(self._perm)
    for i, value in enumerate(self._perm):
      inverse[value] = i
    return Permutation._trusted(inverse)

  def fixed_points(self):
    return [i for i, value in enumerate(self._perm) if i == value]

  def is_involution(self):
    return all(self._perm[value] == i for i, value in enumerate(self._perm))

  def cycle_lengths(self):
    visited = [False]*len(self._perm)
    lengths = []
    for start in range(len(self._perm)):
      if visited[start]:
        continue
      length = 0
      current = start
      while not visited[current]:
        visited[current] = True
        length += 1
        current = self._perm[current]
      lengths.append(length)
    return sorted(lengths)

  def max_cycle_len(self):
    lengths = self.cycle_lengths()
    if not lengths:
      return 0
    return lengths[-1]

  def to_list(self):
    return list(self._perm)

  def __len__(self):
    return len(self._perm)

  def __iter__(self):
    return iter(self._perm)

  def __getitem__(self, element):
    return self._perm[element]

  def __eq__(self, other):
    if not isinstance(other, Permutation):
      return NotImplemented
    return self._perm == other._perm

  def __hash__(self):
    return hash(self._perm)

  def __repr__(self):
    return "Permutation(" + repr(list(self._perm)) + ")"


class PermutationBuilder:
  def __init__(self, n):
    if n > MAX_SIZE:
      raise InvalidPermutation("cannot build a permutation of size " + str(n))
    self._perm = list(range(n))

  def n(self):
    return len(self._perm)

  def swap(self, i, j):
    self._perm[i], self._perm[j] = self._perm[j], self._perm[i]
    return self

  def build(self):
    return Permutation._trusted(self._perm)


def compose(first, second):
  # x -> second(first(x))
  if first.n() != second.n():
    raise InvalidPermutation("cannot compose permutations of sizes " + str(first.n()) + " and " + str(second.n()))
  return Permutation._trusted(second.map(value) for value in first)


def cycle_decomposition(perm):
  return perm.cycle_lengths()


def decompositions_match(left, right, loose=False):
  if loose:
    return set(left) == set(right)
  return sorted(left) == sorted(right)

