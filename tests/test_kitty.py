"""Tests for gridcat.kitty."""

from __future__ import annotations

from gridcat import kitty


class TestEmit:
    def test_exact_sequence(self) -> None:
        seq = kitty.emit("QUJD", 120, 80)
        assert seq == "\x1b_Gf=1,t=d,w=120,h=80;x=QUJD\x1b\\"

    def test_payload_embedded_unchanged(self) -> None:
        payload = "iVBORw0KGgo=" * 1000
        seq = kitty.emit(payload, 1, 1)
        assert seq.startswith("\x1b_Gf=1,t=d,w=1,h=1;x=")
        assert seq.endswith("\x1b\\")
        assert seq.count("\x1b_G") == 1
        assert payload in seq


class TestControlSequences:
    def test_row_break(self) -> None:
        assert kitty.ROW_BREAK == "\n"

    def test_delete_all(self) -> None:
        assert kitty.delete_all_images() == "\x1b_Ga=d,d=A\x1b\\"

    def test_clear_screen(self) -> None:
        assert kitty.clear_screen() == "\x1b[2J\x1b[H"

    def test_cursor_forward(self) -> None:
        assert kitty.cursor_forward(12) == "\x1b[12C"
        assert kitty.cursor_forward(0) == ""
