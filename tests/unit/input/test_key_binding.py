"""Key binding parse/format behavior tests.

Covers canonical text output, case-insensitive parsing, and shift handling.
Also pins down which malformed inputs raise ``KeyParseError``.
"""

from __future__ import annotations

import itertools
import unittest

from blake.errors import KeyParseError
from blake.input.binding import (
    FKey,
    KeyBinding,
    KeyCode,
    KeyModifiers,
    key_binding_to_string,
    parse_key_binding,
)


def _all_modifiers() -> list[KeyModifiers]:
    return [
        KeyModifiers(ctrl=ctrl, alt=alt, shift=shift)
        for ctrl, alt, shift in itertools.product((False, True), repeat=3)
    ]


class KeyBindingFormatTests(unittest.TestCase):
    def test_modifiers_render_in_ctrl_alt_shift_order(self) -> None:
        binding = KeyBinding.of("x", ctrl=True, alt=True, shift=True)
        self.assertEqual(str(binding), "Ctrl+Alt+Shift+x")

    def test_named_keys_use_their_canonical_token(self) -> None:
        self.assertEqual(key_binding_to_string(KeyBinding(KeyCode.PAGE_DOWN)), "PageDown")
        self.assertEqual(key_binding_to_string(KeyBinding.of(KeyCode.ENTER, ctrl=True)), "Ctrl+Enter")
        self.assertEqual(key_binding_to_string(KeyBinding(FKey(12))), "F12")

    def test_space_and_plus_render_as_words(self) -> None:
        self.assertEqual(str(KeyBinding(" ")), "Space")
        self.assertEqual(str(KeyBinding.of("+", ctrl=True)), "Ctrl+Plus")

    def test_uppercase_letter_always_carries_shift(self) -> None:
        self.assertTrue(KeyBinding("J").modifiers.shift)
        self.assertTrue(KeyBinding.of("J").modifiers.shift)
        self.assertEqual(KeyBinding("J"), KeyBinding.of("J", shift=True))
        self.assertEqual(str(KeyBinding("J")), "Shift+J")

    def test_lowercase_letter_keeps_modifiers_as_given(self) -> None:
        self.assertFalse(KeyBinding("j").modifiers.shift)
        self.assertNotEqual(KeyBinding("j"), KeyBinding("J"))

    def test_multi_character_string_key_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            KeyBinding("ab")

    def test_function_key_index_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            FKey(0)


class KeyBindingRoundTripTests(unittest.TestCase):
    def test_every_key_with_every_modifier_set_survives_text_round_trip(self) -> None:
        keys = [*KeyCode, FKey(1), FKey(5), FKey(24), "a", "z", "A", "0", ",", "<", "?", " ", "+", "é"]
        for key in keys:
            for modifiers in _all_modifiers():
                binding = KeyBinding(key, modifiers)
                with self.subTest(binding=repr(binding)):
                    self.assertEqual(parse_key_binding(key_binding_to_string(binding)), binding)


class ParseKeyBindingTests(unittest.TestCase):
    def test_modifier_and_named_key_tokens_are_case_insensitive(self) -> None:
        expected = KeyBinding.of(KeyCode.PAGE_UP, ctrl=True)
        for text in ("Ctrl+PageUp", "ctrl+pageup", "CONTROL+PAGEUP", "Control+pageUp"):
            with self.subTest(text=text):
                self.assertEqual(parse_key_binding(text), expected)

    def test_aliases(self) -> None:
        self.assertEqual(parse_key_binding("Esc"), KeyBinding(KeyCode.ESCAPE))
        self.assertEqual(parse_key_binding("Return"), KeyBinding(KeyCode.ENTER))
        self.assertEqual(parse_key_binding("Del"), KeyBinding(KeyCode.DELETE))
        self.assertEqual(parse_key_binding("space"), KeyBinding(" "))
        self.assertEqual(parse_key_binding("Plus"), KeyBinding("+"))

    def test_literal_plus_after_modifiers(self) -> None:
        self.assertEqual(parse_key_binding("+"), KeyBinding("+"))
        self.assertEqual(parse_key_binding("Ctrl++"), KeyBinding.of("+", ctrl=True))

    def test_uppercase_character_implies_shift(self) -> None:
        self.assertEqual(parse_key_binding("G"), KeyBinding.of("G", shift=True))
        self.assertEqual(parse_key_binding("Shift+G"), parse_key_binding("G"))

    def test_single_characters_are_taken_literally(self) -> None:
        self.assertEqual(parse_key_binding("f"), KeyBinding("f"))
        self.assertEqual(parse_key_binding(","), KeyBinding(","))
        self.assertEqual(parse_key_binding("Alt+?"), KeyBinding.of("?", alt=True))

    def test_function_keys(self) -> None:
        self.assertEqual(parse_key_binding("F1"), KeyBinding(FKey(1)))
        self.assertEqual(parse_key_binding("shift+f10"), KeyBinding.of(FKey(10), shift=True))

    def test_malformed_bindings_raise_parse_error(self) -> None:
        for text in ("", "Ctrl+", "Ctrl", "Ctrl+a+b", "Hyper+a", "Foo", "F0", "Fx", "F1a", "F-1", "a+b"):
            with self.subTest(text=text):
                with self.assertRaises(KeyParseError):
                    parse_key_binding(text)

    def test_non_string_input_raises_parse_error(self) -> None:
        with self.assertRaises(KeyParseError):
            parse_key_binding(None)  # type: ignore[arg-type]

    def test_parse_error_is_also_a_value_error(self) -> None:
        with self.assertRaises(ValueError) as ctx:
            parse_key_binding("Ctrl+Nope")
        self.assertIn("Ctrl+Nope", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
