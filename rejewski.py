"""Rotor start recovery from doubled message-key indicators.

Operators sent each three-letter message key twice, enciphered at the daily
rotor start, so letters 0 and 3 (1 and 4, 2 and 5) of every indicator are the
same plaintext letter seen at positions i and i+3. Across a day of traffic those
pairs spell out three permutations whose cycle structure depends on the rotor
start only: the plugboard conjugates them and conjugation keeps cycle lengths.
The attack tabulates that structure for every start and keeps the starts whose
structure matches the intercepted one.
"""

import logging
import random
from threading import Thread

import progressbar

from components import PlugBoard
from errors import ConflictingIndicator, InsufficientIndicators, MalformedIndicator
from letters import ALPHABET, ALPHABET_SIZE, Letter, is_letter
from machine import POSITIONS, CipherMachine
from permutation import Permutation, compose, decompositions_match


logger = logging.getLogger(__name__)

INDICATOR_LENGTH = 6
INDICATOR_PAIRS = ((0, 3), (1, 4), (2, 5))
DOUBLING_DISTANCE = 3


class CharacteristicTable:
  def __init__(self, rotators, reflector, workers=1, progress=False):
    self.machine = CipherMachine(PlugBoard.identity(), rotators, reflector).clone()
    self.machine.set_position(0)
    self.workers = max(1, int(workers))
    self.progress = progress
    self.tables = [None]*POSITIONS
    self.decompositions = [None]*POSITIONS

  def build(self):
    logger.debug("Sweeping %d rotor positions with %d worker(s)", POSITIONS, self.workers)
    if self.workers == 1:
      self.Sweep(0, POSITIONS, self.progress)
    else:
      self.ParallelSweep()
    for i in range(POSITIONS):
      combined = compose(self.tables[i], self.tables[(i + DOUBLING_DISTANCE) % POSITIONS])
      self.decompositions[i] = tuple(combined.cycle_lengths())
    # the single-position tables are only needed for the composites
    self.tables = [None]*POSITIONS
    logger.debug("Characteristic table holds %d distinct cycle structures", len(set(self.decompositions)))
    return self

  def Sweep(self, start, stop, progress=False):
    machine = self.machine.clone()
    machine.set_position(start)
    bar = progressbar.ProgressBar(max_value=stop - start) if progress else None
    for i in range(start, stop):
      self.tables[i] = machine.static_permutation()
      machine.advance()
      if bar:
        bar.update(i - start)
    if bar:
      bar.finish()

  def ParallelSweep(self):
    chunk = -(-POSITIONS // self.workers)
    threads = []
    for start in range(0, POSITIONS, chunk):
      stop = min(start + chunk, POSITIONS)
      thread = Thread(target=self.Sweep, args=(start, stop))
      thread.start()
      threads.append((thread, stop))
    bar = progressbar.ProgressBar(max_value=POSITIONS) if self.progress else None
    for thread, stop in threads:
      thread.join()
      if bar:
        bar.update(stop)
    if bar:
      bar.finish()

  def is_built(self):
    return self.decompositions[0] is not None

  def decomposition(self, position):
    return self.decompositions[position % POSITIONS]


def check_indicator(indicator, line=None):
  where = "" if line is None else " (line " + str(line) + ")"
  if len(indicator) != INDICATOR_LENGTH:
    raise MalformedIndicator("indicator " + repr(indicator) + where + " must have " + str(INDICATOR_LENGTH) + " letters")
  if not all(is_letter(char) for char in indicator):
    raise MalformedIndicator("indicator " + repr(indicator) + where + " contains non-alphabetic characters")
  return indicator.upper()


def read_indicators(lines):
  indicators = []
  for n, line in enumerate(lines, 1):
    line = line.strip()
    if not line:
      continue
    indicators.append(check_indicator(line, n))
  return indicators


def derive_indicator_permutations(indicators):
  indicators = [check_indicator(indicator) for indicator in indicators]
  if not indicators:
    raise InsufficientIndicators("no indicators were supplied")
  partials = []
  for first, second in INDICATOR_PAIRS:
    images = [None]*ALPHABET_SIZE
    sources = [None]*ALPHABET_SIZE
    for indicator in indicators:
      a = Letter.from_char(indicator[first]).value
      b = Letter.from_char(indicator[second]).value
      if images[a] is not None and images[a] != b:
        raise ConflictingIndicator(indicator + ": " + ALPHABET[a] + " at position " + str(first) + " already pairs with " + ALPHABET[images[a]] + ", not " + ALPHABET[b])
      if sources[b] is not None and sources[b] != a:
        raise ConflictingIndicator(indicator + ": " + ALPHABET[b] + " at position " + str(second) + " already pairs with " + ALPHABET[sources[b]] + ", not " + ALPHABET[a])
      images[a] = b
      sources[b] = a
    partials.append(images)
  perms = []
  for (first, second), images in zip(INDICATOR_PAIRS, partials):
    missing = [ALPHABET[i] for i, image in enumerate(images) if image is None]
    if missing:
      raise InsufficientIndicators("positions " + str(first) + "/" + str(second) + " leave " + "".join(missing) + " unpaired after " + str(len(indicators)) + " indicators")
    perms.append(Permutation(images))
  return perms


def cycle_attack(table, indicators, loose=False):
  targets = [tuple(perm.cycle_lengths()) for perm in derive_indicator_permutations(indicators)]
  if not table.is_built():
    table.build()
  logger.debug("Indicator cycle structures: %s", targets)
  candidates = []
  for i in range(POSITIONS):
    if all(decompositions_match(table.decomposition(i + d), target, loose) for d, target in enumerate(targets)):
      candidates.append(i)
  logger.debug("%d candidate position(s) found", len(candidates))
  return candidates


def crack(rotators, reflector, indicators, workers=1, progress=False, loose=False):
  # Bad traffic is reported before the sweep starts.
  derive_indicator_permutations(indicators)
  table = CharacteristicTable(rotators, reflector, workers, progress).build()
  return cycle_attack(table, indicators, loose)


def random_message_keys(count, cover=False, rng=None):
  rng = rng or random.Random()
  keys = []
  if cover:
    columns = []
    for _ in range(3):
      column = list(ALPHABET)
      rng.shuffle(column)
      columns.append(column)
    keys.extend("".join(letters) for letters in zip(*columns))
  for _ in range(count):
    keys.append("".join(rng.choice(ALPHABET) for _ in range(3)))
  return keys


def encipher_indicators(machine, message_keys):
  indicators = []
  for key in message_keys:
    if len(key) != 3 or not all(is_letter(char) for char in key):
      raise MalformedIndicator("message key " + repr(key) + " must be 3 letters")
    operator = machine.clone()
    indicators.append(operator.map_text(key + key))
  return indicators
