# generator.py
import random

BABBLE_CHANCE = 0.5
BABBLE_MIN_WORDS = 2
BABBLE_MAX_WORDS = 5
BABBLE_DELAY_MS = (3000, 5000)


def pick_echo(records, rng):
    """Content of one uniformly chosen record, or '' when there are none."""
    if not records:
        return ''
    return records[rng.randrange(len(records))]['content']


def compose_babble(words, rng):
    """Assemble a short sentence of distinct learned words.

    Returns '' when fewer than two distinct words could be collected.
    """
    target = rng.randint(BABBLE_MIN_WORDS, BABBLE_MAX_WORDS)
    target = min(target, len(set(words)))
    selected = []
    while len(selected) < target:
        word = words[rng.randrange(len(words))]
        if word not in selected:
            selected.append(word)
    if len(selected) < BABBLE_MIN_WORDS:
        return ''
    return ' '.join(selected) + '.'


def babble_delay(rng, bounds=BABBLE_DELAY_MS):
    low, high = bounds
    return rng.randrange(low, high) / 1000.0 if high > low else low / 1000.0


class ResponseGenerator:
    def __init__(self, rng=None, babble_chance=BABBLE_CHANCE, delay_ms=BABBLE_DELAY_MS):
        self.rng = rng or random.Random()
        self.babble_chance = babble_chance
        self.delay_ms = delay_ms

    def echo(self, records):
        return pick_echo(records, self.rng)

    def maybe_babble(self, words):
        """Roll the babble chance; returns (sentence, delay_seconds) or None."""
        if self.rng.random() >= self.babble_chance:
            return None
        sentence = compose_babble(words, self.rng)
        if not sentence:
            return None
        return sentence, babble_delay(self.rng, self.delay_ms)

    def choice(self, items):
        return items[self.rng.randrange(len(items))]
