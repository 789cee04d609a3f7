#!/usr/bin/python
"""This is a simple terminal word-guessing game: a secret five-letter word is
picked at random from a word list, and the player gets six attempts to find it,
with colored feedback about each letter after every guess."""

import argparse  # Used to parse the (single, optional) command-line argument
import enum  # Used to define the closed sets of letter matches and round statuses
import logging  # Used for diagnostics that aren't part of the game's own output
import os  # Used to find the bundled word list next to this script
import random  # Used to pick the secret word
import sys  # Used for the error stream
from typing import Iterator, NamedTuple, Optional, Self
from colorama import Back, Fore, Style, just_fix_windows_console  # Used for all of the ANSI styling

Letter = str

DEFAULT_WORDS_FILENAME = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "words5.txt")
WORD_LENGTH = 5
MAX_ATTEMPTS = 6  # Fixed on purpose; the game has no difficulty settings.

log = logging.getLogger(__name__)


class WordleError(Exception):
    """Base class for all of the errors raised by the game."""


class CatalogLoadError(WordleError):
    """The word list could not be read at all."""


class EmptyCatalogError(WordleError):
    """The word list was read, but contained no usable words."""


class InputReadError(WordleError):
    """Reading a line of interactive input failed (e.g. stdin was closed).
    This is different from the player typing something invalid."""


class InvalidGuessError(WordleError):
    """The player typed something that isn't a well-formed guess.
    This is recoverable: the player just gets asked again."""


class NoActiveSecretError(WordleError):
    """A guess was scored while no round was in progress."""


def is_alphabetic(text: str) -> bool:
    """Note that this is vacuously True for the empty string, unlike str.isalpha.
    That matters for the order of the guess validation messages."""
    return all(char.isalpha() for char in text)


class Word:
    """A Word represents a single valid five-letter word, always in upper case.
    Words are immutable values: two Words with the same letters are equal."""

    full_word: str
    letters: frozenset[Letter]

    __slots__ = ("full_word", "letters")

    def __init__(self, full_word: str) -> None:
        full_word = full_word.upper()
        if len(full_word) != WORD_LENGTH:
            raise ValueError(f"Words must have exactly {WORD_LENGTH} letters, but got {full_word!r}!")
        if not is_alphabetic(full_word):
            raise ValueError(f"Words must only contain letters, but got {full_word!r}!")

        object.__setattr__(self, "full_word", full_word)
        object.__setattr__(self, "letters", frozenset(full_word))

    def __setattr__(self, name, value) -> None:
        raise AttributeError("Words are immutable!")

    def __str__(self) -> str:
        return self.full_word

    def __repr__(self) -> str:
        return f"<wordle_game.Word at {hex(id(self))}: full_word: {self.full_word}>"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Word):
            return self.full_word == other.full_word
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.full_word)

    def __len__(self) -> int:
        return len(self.full_word)

    def __iter__(self) -> Iterator[Letter]:
        yield from self.full_word

    def __getitem__(self, index: int) -> Letter:
        return self.full_word[index]

    def __contains__(self, letter: Letter) -> bool:
        return letter in self.letters


class WordCatalog:
    """A WordCatalog is the read-only collection of Words that secrets are drawn from.
    It is built once at startup and then shared by every round; it is never empty."""

    _words: tuple[Word, ...]

    def __init__(self, words: list[Word | str]) -> None:
        # dict.fromkeys drops duplicates while keeping the first-seen order.
        self._words = tuple(dict.fromkeys(Word(w) if isinstance(w, str) else w for w in words))
        if not self._words:
            raise EmptyCatalogError("The word catalog must contain at least one word!")

    def __str__(self) -> str:
        return f"WordCatalog containing {len(self)} words"

    def __repr__(self) -> str:
        return (
            f"<wordle_game.WordCatalog at {hex(id(self))}: "
            f"_words: {[str(w) for w in self._words]}"
            f">"
        )

    def __eq__(self, other: object) -> bool:
        if isinstance(other, WordCatalog):
            return set(self) == set(other)
        return NotImplemented

    def __contains__(self, word: Word | str) -> bool:
        return (Word(word) if isinstance(word, str) else word) in self._words

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[Word]:
        yield from self._words

    @classmethod
    def load(cls, raw_text: str) -> Self:
        """This builds a WordCatalog out of raw line-oriented text.
        Every line that is exactly five letters long (in any case) becomes a Word;
        blank lines, lines of the wrong length and lines containing anything other
        than letters are silently discarded.

        Lines are uppercased before they are checked, since a few letters
        (like "ß") change length when uppercased."""
        return cls([
            word
            for word in (line.upper() for line in raw_text.splitlines())
            if len(word) == WORD_LENGTH and is_alphabetic(word)
        ])

    @classmethod
    def from_file(cls, filename: str) -> Self:
        """This sets up a WordCatalog by reading Words from a text file."""
        try:
            with open(filename, "r", encoding = "utf-8") as infile:
                raw_text = infile.read()
        except (OSError, UnicodeDecodeError) as ex:
            raise CatalogLoadError(f"Error occured while reading file: {filename}\n{ex}") from ex

        try:
            catalog = cls.load(raw_text)
        except EmptyCatalogError as ex:
            raise EmptyCatalogError(f"No appropriate words found in file: {filename}") from ex

        log.debug(f"Loaded {len(catalog)} words from {filename}")
        return catalog

    def pick_random(self, rng: Optional[random.Random] = None) -> Word:
        """Returns one of the Words, chosen uniformly at random."""
        return (rng or random).choice(self._words)


class LetterMatch(enum.Enum):
    """How a single letter of a guess relates to the secret word."""
    FULL = "full"  # Right letter in the right position
    HALF = "half"  # Letter is somewhere in the secret, but not here
    NONE = "none"  # Letter is nowhere in the secret


class GuessResult(NamedTuple):
    """The score of one guess: one LetterMatch per position,
    plus the number of FULL matches."""
    matches: tuple[LetterMatch, ...]
    full_match_count: int

    @property
    def is_exact_match(self) -> bool:
        return self.full_match_count == WORD_LENGTH


def evaluate_guess(secret: Word | str, guess: Word | str) -> GuessResult:
    """This scores a guess against the secret word.

    Each position is looked at on its own: if the letters agree, it's a FULL match;
    otherwise, if the guessed letter appears anywhere in the secret, it's a HALF match;
    otherwise it's NONE.

    One quirk about this scoring involves words with repeated letters. The secret's
    letters are never "used up", so if the secret is "ABCDE" and the guess is "AABCD",
    the second "A" still gets a HALF match, even though the secret only has the one "A"
    and it has already been matched in the first position. This is intentionally
    simpler than the usual Wordle rule (which would give that second "A" a NONE)."""

    secret = Word(secret) if isinstance(secret, str) else secret
    guess = Word(guess) if isinstance(guess, str) else guess

    matches = []
    for guess_letter, secret_letter in zip(guess, secret):
        if guess_letter == secret_letter:
            matches.append(LetterMatch.FULL)
        elif guess_letter in secret:
            matches.append(LetterMatch.HALF)
        else:
            matches.append(LetterMatch.NONE)

    return GuessResult(tuple(matches), matches.count(LetterMatch.FULL))


class RoundStatus(enum.Enum):
    """The states a RoundState moves through."""
    NO_ACTIVE_ROUND = "no active round"
    IN_PROGRESS = "in progress"
    WON = "won"
    LOST = "lost"
    GAME_OVER = "game over"


class RoundState:
    """A RoundState tracks the secret word, how many attempts have been used on it,
    and whether the current round has been won or lost.

    It is created once per game with a fixed attempt limit and reused across rounds:
    `reset` clears the secret and the attempt counter but keeps the limit."""

    secret: Optional[Word]
    attempts: int
    max_attempts: int
    status: RoundStatus

    def __init__(self, max_attempts: int = MAX_ATTEMPTS) -> None:
        if max_attempts < 1:
            raise ValueError("A round must allow at least one attempt!")

        self.max_attempts = max_attempts
        self.secret = None
        self.attempts = 0
        self.status = RoundStatus.NO_ACTIVE_ROUND

    def __repr__(self) -> str:
        return (
            f"<wordle_game.RoundState at {hex(id(self))}: "
            f"status: {self.status.name}"
            f", attempts: {self.attempts}/{self.max_attempts}"
            f">"
        )

    @property
    def next_attempt_number(self) -> int:
        """The 1-based number of the guess that's about to be made."""
        return self.attempts + 1

    def begin_round(self, catalog: WordCatalog, rng: Optional[random.Random] = None) -> None:
        """Draws a new secret from the catalog, unless a secret is already active,
        in which case this does nothing."""

        if self.status is RoundStatus.GAME_OVER:
            raise RuntimeError("Cannot begin a round once the game is over!")
        if self.secret is not None:
            return

        self.secret = catalog.pick_random(rng)
        self.attempts = 0
        self.status = RoundStatus.IN_PROGRESS
        log.debug(f"Began a new round with secret {self.secret}")

    def record_attempt(self, guess: Word | str) -> GuessResult:
        """Scores a guess against the secret, counts it as an attempt,
        and then decides whether the round has been won, lost, or continues."""

        if self.secret is None or self.status is not RoundStatus.IN_PROGRESS:
            raise NoActiveSecretError(
                f"Cannot score a guess while the round status is '{self.status.value}'!"
            )

        result = evaluate_guess(self.secret, guess)
        self.attempts += 1

        if result.is_exact_match:
            self.status = RoundStatus.WON
        elif self.attempts >= self.max_attempts:
            self.status = RoundStatus.LOST

        return result

    def reset(self) -> None:
        """Clears the secret and the attempt counter, ready for a fresh round."""
        self.secret = None
        self.attempts = 0
        self.status = RoundStatus.NO_ACTIVE_ROUND

    def end_game(self) -> None:
        """Marks the whole game as finished; no further rounds can begin."""
        self.secret = None
        self.status = RoundStatus.GAME_OVER


WORDLE_BANNER = "".join(
    f"{Fore.BLACK}{background} {letter} "
    for background, letter in zip(
        [Back.RED, Back.GREEN, Back.YELLOW, Back.BLUE, Back.MAGENTA, Back.CYAN],
        "WORDLE",
    )
) + Style.RESET_ALL


def match_style(letter_match: LetterMatch) -> str:
    """Returns the ANSI style used to draw a letter with the given match."""
    match letter_match:
        case LetterMatch.FULL:
            return Fore.BLACK + Back.GREEN
        case LetterMatch.HALF:
            return Fore.BLACK + Back.YELLOW
        case LetterMatch.NONE:
            return Fore.BLACK + Back.WHITE
        case _:
            raise ValueError(f"Unknown letter match: {letter_match!r}")


def format_matches(guess: Word | str, matches: tuple[LetterMatch, ...] | list[LetterMatch]) -> str:
    """This renders a scored guess for display: each letter is preceded by the style
    for its match, and the whole line ends with a style reset."""
    segments = []
    for letter_match, letter in zip(matches, str(guess)):
        segments.append(match_style(letter_match))
        segments.append(letter)
    segments.append(Style.RESET_ALL)
    return " ".join(segments)


def read_line(prompt: str = "") -> str:
    """Reads one line from the terminal, turning a closed or broken stream into an InputReadError."""
    try:
        return input(prompt)
    except (EOFError, OSError) as ex:
        raise InputReadError(f"Error occured while reading input: {ex!r}") from ex


def validate_guess(text: str) -> Word:
    """This checks a line typed by the player and turns it into a Word.
    The alphabetic check deliberately comes before the length check."""
    text = text.strip().upper()

    if not is_alphabetic(text):
        raise InvalidGuessError("Word should contain only alphabets")
    if len(text) != WORD_LENGTH:
        raise InvalidGuessError(f"Must provide word of length {WORD_LENGTH}")

    return Word(text)


def input_guess(attempt_number: int) -> Word:
    """Keeps asking the player for a guess until they type a valid one.
    Invalid guesses don't count as attempts."""
    while True:
        try:
            return validate_guess(read_line(f"{attempt_number} "))
        except InvalidGuessError as ex:
            print(f"INFO: {ex}")


def play_again() -> bool:
    """Asks whether to play another round. Only an exact "y" or an exact "N" is accepted;
    note the differing case, which is how the prompt has always behaved."""
    while True:
        print("Playagain? [y/N]")
        match read_line().strip():
            case "y":
                return True
            case "N":
                return False


def play(catalog: WordCatalog, max_attempts: int = MAX_ATTEMPTS) -> RoundState:
    """This runs the interactive game loop until the player declines to play again."""

    state = RoundState(max_attempts)

    while True:
        if state.status is RoundStatus.NO_ACTIVE_ROUND:
            state.begin_round(catalog)
            print(f"\n{WORDLE_BANNER}\n")

        guess = input_guess(state.next_attempt_number)
        result = state.record_attempt(guess)
        print(f"{format_matches(guess, result.matches)}\n")

        match state.status:
            case RoundStatus.WON:
                print("You WON!")
            case RoundStatus.LOST:
                print("You LOST!")
                print(f"Word: {state.secret}")
            case _:
                continue

        if play_again():
            state.reset()
        else:
            state.end_game()
            return state


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point: parses the arguments, loads the word list, and plays."""
    parser = argparse.ArgumentParser(
        description = "Guess the five-letter word in six attempts.",
        formatter_class = argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "words_file", nargs = "?", default = DEFAULT_WORDS_FILENAME,
        help = "Text file with one candidate word per line",
    )
    parser.add_argument(
        "--verbose", "-v", action = "store_true",
        help = "Log diagnostic messages to stderr",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level = logging.DEBUG if args.verbose else logging.WARNING,
        format = "%(levelname)s: %(message)s",
    )
    just_fix_windows_console()

    try:
        catalog = WordCatalog.from_file(args.words_file)
        play(catalog)
    except WordleError as ex:
        print(f"Error: {ex}", file = sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
