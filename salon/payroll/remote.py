# -*- coding: utf-8 -*-
from __future__ import annotations

import itertools
import logging
import threading
from typing import Any

import requests

log = logging.getLogger(__name__)


class PayslipClient:
    """
    GET {base}/employees/<id>/payroll?month=&year= (month с нуля).

    Любая ошибка (сеть, статус, не-JSON) пишется в лог и даёт None:
    расчётный лист тогда строится локально.
    """

    def __init__(self, base_url: str | None, timeout: float = 5.0, session: requests.Session | None = None):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    def fetch(self, employee_id, month: int, year: int) -> dict[str, Any] | None:
        if not self.enabled:
            return None
        url = f"{self.base_url}/employees/{employee_id}/payroll"
        try:
            resp = self.session.get(url, params={"month": month, "year": year}, timeout=self.timeout)
            if resp.status_code == 404:
                return None
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            log.warning("payslip fetch failed for employee=%s %s/%s: %s", employee_id, month, year, e)
            return None
        if not isinstance(data, dict):
            log.warning("payslip for employee=%s %s/%s is not an object", employee_id, month, year)
            return None
        return data


class SelectionGuard:
    """
    Последний выбор (сотрудник, месяц, год) побеждает.

    Каждый запрос получает номер; ответ применяется, только если за это
    время не было нового выбора.
    """

    def __init__(self):
        self._seq = itertools.count(1)
        self._lock = threading.Lock()
        self._latest = 0
        self.selection: tuple | None = None
        self.payload: dict[str, Any] | None = None

    def select(self, employee_id, month: int, year: int) -> int:
        with self._lock:
            self._latest = next(self._seq)
            self.selection = (employee_id, month, year)
            self.payload = None
            return self._latest

    def resolve(self, ticket: int, payload: dict[str, Any] | None) -> bool:
        with self._lock:
            if ticket != self._latest:
                log.debug("stale payslip response dropped (ticket=%s latest=%s)", ticket, self._latest)
                return False
            self.payload = payload
            return True

    def load(self, client: PayslipClient, employee_id, month: int, year: int) -> dict[str, Any] | None:
        ticket = self.select(employee_id, month, year)
        payload = client.fetch(employee_id, month, year)
        return payload if self.resolve(ticket, payload) else None
