# spa_nav/report/json_report.py

"""
Генерация JSON-отчёта для проекта SpaNav.

Сериализация снимка сессии (NavigatorSession.snapshot) в файл.
"""
import json
from pathlib import Path
from typing import Any, Dict


def render_json(snapshot: Dict[str, Any], output_path: Path | str) -> Path:
    """
    Сохраняет снимок сессии в формате JSON по указанному пути.

    :param snapshot: словарь из NavigatorSession.snapshot()
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла

    Пример:
    ```python
    from spa_nav.report.json_report import render_json
    report_path = render_json(session.snapshot(), 'reports/session.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(snapshot, f, ensure_ascii=False, indent=2)

    return output
