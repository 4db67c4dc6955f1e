# tests/test_quickadd_parser.py

from __future__ import annotations

from datetime import date

from ikigai_planner.quickadd.parser import (
    TaskDraft,
    format_quick_add,
    normalize_date,
    parse_quick_add,
)

TODAY = date(2024, 1, 15)


def test_parse_full_line() -> None:
    draft = parse_quick_add(
        "Comprar leite @pessoal #fisica $acao !30/05 *importante *urgente",
        today=TODAY,
    )

    assert draft.title == "Comprar leite"
    assert draft.life_role == "pessoal"
    assert draft.energy_category == "fisica"
    assert draft.entropy_category == "acao"
    assert draft.due_date == "2024-05-30"
    assert draft.importance is True
    assert draft.urgency is True


def test_plain_text_is_trimmed_title_only() -> None:
    draft = parse_quick_add("   Ligar   para o banco  ")

    assert draft == TaskDraft(title="Ligar para o banco")
    assert draft.to_payload() == {"title": "Ligar para o banco", "importance": False, "urgency": False}


def test_tags_anywhere_in_text() -> None:
    draft = parse_quick_add("@profissional Revisar !2024-06-01 relatório #mental")

    assert draft.title == "Revisar relatório"
    assert draft.life_role == "profissional"
    assert draft.energy_category == "mental"
    assert draft.due_date == "2024-06-01"


def test_full_date_with_year() -> None:
    draft = parse_quick_add("Pagar IPVA !05/06/2025", today=TODAY)
    assert draft.due_date == "2025-06-05"
    assert draft.title == "Pagar IPVA"


def test_first_tag_of_a_kind_wins_and_rest_stays_in_title() -> None:
    draft = parse_quick_add("Estudar @intelectual inglês @social")

    assert draft.life_role == "intelectual"
    assert draft.title == "Estudar inglês @social"


def test_unicode_tag_words() -> None:
    draft = parse_quick_add("Caminhar @saúde #física")
    assert draft.life_role == "saúde"
    assert draft.energy_category == "física"


def test_single_digit_date_is_not_a_date_token() -> None:
    draft = parse_quick_add("Reunião !5/6")
    assert draft.due_date is None
    assert draft.title == "Reunião !5/6"


def test_flags_only_gives_empty_title() -> None:
    draft = parse_quick_add("*urgente")
    assert draft.title == ""
    assert draft.urgency is True
    assert draft.importance is False


def test_payload_has_only_given_optional_keys() -> None:
    draft = parse_quick_add("Treinar #fisica *importante")
    assert draft.to_payload() == {
        "title": "Treinar",
        "importance": True,
        "urgency": False,
        "energyCategory": "fisica",
    }


def test_normalize_date_does_not_validate_calendar() -> None:
    assert normalize_date("31/02", today=TODAY) == "2024-02-31"
    assert normalize_date("2024-03-01") == "2024-03-01"


def test_format_quick_add_is_parsed_back() -> None:
    line = format_quick_add(
        "Planejar viagem",
        life_role="familiar",
        entropy_category="planejamento",
        due_date="2024-07-20T00:00:00.000Z",
        importance=True,
    )
    assert line == "Planejar viagem @familiar $planejamento !2024-07-20 *importante"

    draft = parse_quick_add(line)
    assert draft.to_quick_add() == line


def test_english_title_with_iso_date() -> None:
    draft = parse_quick_add("Buy milk @pessoal #fisica !2025-05-30 *urgente")

    assert draft.title == "Buy milk"
    assert draft.life_role == "pessoal"
    assert draft.energy_category == "fisica"
    assert draft.entropy_category is None
    assert draft.due_date == "2025-05-30"
    assert draft.urgency is True
    assert draft.importance is False


def test_short_date_takes_year_from_today() -> None:
    draft = parse_quick_add("Call mom !28/04", today=date(2025, 1, 1))
    assert draft.due_date == "2025-04-28"
    assert draft.title == "Call mom"
