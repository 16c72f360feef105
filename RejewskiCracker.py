#!/usr/bin/env python3

import argparse
import json
import logging
import random
import sys

from configuration import create_machine, create_reflector, create_rotator_group, load_configuration
from errors import EnigmaError
from machine import position_to_key
from rejewski import crack, encipher_indicators, random_message_keys, read_indicators


BANNER = r"""
  ____       _                    _    _    ____                _
 |  _ \ ___ (_) _____      _____| | _(_)  / ___|_ __ __ _  ___| | _____ _ __
 | |_) / _ \| |/ _ \ \ /\ / / __| |/ / | | |   | '__/ _` |/ __| |/ / _ \ '__|
 |  _ <  __/| |  __/\ V  V /\__ \   <| | | |___| | | (_| | (__|   <  __/ |
 |_| \_\___|/ |\___| \_/\_/ |___/_|\_\_|  \____|_|  \__,_|\___|_|\_\___|_|
          |__/
"""


class BlankLinesHelpFormatter (argparse.HelpFormatter):
  def _split_lines(self, text, width):
    return super()._split_lines(text, width) + ['']
  def _fill_text(self, text, width, indent):
    return ''.join(indent + line for line in text.splitlines(keepends=True))


usage_examples = '''Examples:

./RejewskiCracker.py -p "Hello World" -c '{"Rotors":"I II III", "Reflector":"B", "Plugboard":"AV BS CG DL FU HZ", "Key":"WXC"}'
./RejewskiCracker.py -i message.txt -o message.enc -c machine.json
./RejewskiCracker.py -g 40 --cover -o indicators.txt -c '{"Rotors":"I II III", "Reflector":"B", "Plugboard":"AV BS", "Key":"QEV"}'
./RejewskiCracker.py -a indicators.txt -o candidates -c '{"Rotors":"I II III", "Reflector":"B"}' -w 4
 '''

parser = argparse.ArgumentParser(description='Rotor machine emulator and indicator cycle attack', formatter_class=BlankLinesHelpFormatter, epilog=usage_examples)
mgroup = parser.add_argument_group("Rejewski Cracker", "Options for Rejewski Cracker")
mgroup.add_argument("-p", "--process", dest='text_process', type=str, help="Encrypt or decrypt a text")
mgroup.add_argument("-i", "--input", dest='input_file', type=str, help="Encrypt or decrypt the contents of a file")
mgroup.add_argument("-a", "--attack", dest='indicators_file', type=str, help="Recover the rotor start from a file of doubled indicators, one per line")
mgroup.add_argument("-g", "--generate-indicators", dest='generate_count', type=int, help="Encipher N random message keys at the configured key and output their indicators")
mgroup.add_argument("-v", "--verbose", action="store_true", help="Print debug logs")

cgroup = parser.add_argument_group("Configuration", "Options shared by all modes")
cgroup.add_argument("-c", "--configuration", dest='configuration', type=str, help="Machine configuration, as JSON or as a path to a JSON file")
cgroup.add_argument("-o", "--output", dest='output_file', type=str, help="Output file. Results are printed when omitted")

agroup = parser.add_argument_group("Attack", "Options for -a")
agroup.add_argument("-w", "--workers", dest='workers', type=int, default=1, help="Number of threads sweeping rotor positions")
agroup.add_argument("--loose", action="store_true", help="Compare cycle structures as sets of lengths, ignoring how often each length occurs")

ggroup = parser.add_argument_group("Indicators", "Options for -g")
ggroup.add_argument("--cover", action="store_true", help="Add 26 keys so every letter appears at every key position")
ggroup.add_argument("--seed", dest='seed', type=int, help="Random seed for message keys")


class MissingParameter(Exception):
  pass


def write_output(options, lines, mode="w"):
  if options.output_file:
    f = open(options.output_file, mode)
    for line in lines:
      f.write(line + "\n")
    f.close()
  else:
    for line in lines:
      print(line)


def process(options):
  print(BANNER)
  configuration = load_configuration(options.configuration)
  print("Configuration :")
  print(json.dumps(configuration))
  machine = create_machine(configuration)
  if options.input_file:
    text = open(options.input_file).read()
  else:
    text = options.text_process
  print("Processing text using specified configuration...")
  result = machine.map_text(text)
  if options.output_file:
    write_output(options, [result])
    print("Transformed contents have been saved to " + options.output_file)
  else:
    print("Result :\n")
    print(result)


def generate(options):
  machine = create_machine(options.configuration)
  rng = random.Random(options.seed)
  keys = random_message_keys(options.generate_count, options.cover, rng)
  indicators = encipher_indicators(machine, keys)
  write_output(options, indicators)


def attack(options):
  print(BANNER)
  configuration = load_configuration(options.configuration)
  rotators = create_rotator_group(configuration)
  reflector = create_reflector(configuration)
  indicators = read_indicators(open(options.indicators_file).readlines())
  print("Rotors : " + json.dumps(configuration["Rotors"]))
  print("Reflector : " + json.dumps(configuration["Reflector"]))
  print("Indicators : " + str(len(indicators)))
  print("Rejewski Cracker will test " + str(26**3) + " rotor positions")
  candidates = crack(rotators, reflector, indicators, options.workers, progress=True, loose=options.loose)
  print(str(len(candidates)) + " candidate position(s) found")
  confs = [json.dumps({"Position": position, "Key": position_to_key(position)}) for position in candidates]
  write_output(options, confs, "a")


def main(argv=None):
  options = parser.parse_args(argv)
  logging.basicConfig(
    level=logging.DEBUG if options.verbose else logging.WARNING,
    format="[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
  )
  try:
    if options.text_process or options.input_file:
      if not options.configuration:
        raise MissingParameter("Missing configuration, please use --help")
      process(options)

    elif options.indicators_file:
      if not options.configuration:
        raise MissingParameter("Missing rotors and reflector configuration, please use --help")
      if options.workers < 1:
        raise MissingParameter("Number of workers must be at least 1, please use --help")
      attack(options)

    elif options.generate_count is not None:
      if not options.configuration:
        raise MissingParameter("Missing configuration, please use --help")
      if options.generate_count < 0:
        raise MissingParameter("Number of indicators cannot be negative, please use --help")
      generate(options)

    else:
      raise MissingParameter("Missing options, please use --help")
  except MissingParameter as e:
    print(e)
    return 1
  except (EnigmaError, OSError) as e:
    print("Error : " + str(e))
    return 1
  return 0


if __name__ == "__main__":
  sys.exit(main())
