# -*- coding: utf-8 -*-
"""
Наложение «авторитетных» значений поверх вычисленных локально.

Одна функция на оба случая: расчётный лист сотрудника (сервер против
локального расчёта) и итоги смены (данные смены против суммы по чекам).
"""
from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping


def present(v: Any) -> bool:
    return v is not None


def overlay(
    derived: Mapping[str, Any],
    authoritative: Mapping[str, Any] | None,
    *,
    fields: Iterable[str] | None = None,
    accept: Callable[[Any], bool] = present,
    convert: Callable[[str, Any], Any] | None = None,
) -> tuple[dict[str, Any], set[str]]:
    """
    Поле за полем: значение из ``authoritative``, если оно проходит ``accept``,
    иначе локальное. Возвращает (итог, множество перекрытых полей).
    ``convert(name, value)`` приводит принятое значение к типу итога.
    """
    out = dict(derived)
    taken: set[str] = set()
    if not authoritative:
        return out, taken
    for name in (fields if fields is not None else derived.keys()):
        if name not in authoritative:
            continue
        v = authoritative[name]
        if not accept(v):
            continue
        out[name] = convert(name, v) if convert else v
        taken.add(name)
    return out, taken
