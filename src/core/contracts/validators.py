"""
JSON Schema Contract Validators

Модуль для валидации JSON данных ledger согласно формальным JSON Schema
контрактам. Использует библиотеку jsonschema для проверки соответствия.

Схемы (src/core/contracts/schema/):
- transfer_record.json   — запись Transfer для indexer
- approval_record.json   — запись Approval для indexer
- permit_request.json    — подписанный permit, переданный relayer
- permit_typed_data.json — EIP-712 документ для off-line подписи
- ledger_snapshot.json   — снапшот состояния ledger
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import best_match


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы поставляются вместе с пакетом в каталоге schema/ рядом с модулем.
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'permit_request')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            json.JSONDecodeError: Если файл не является валидным JSON
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}")

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Draft202012Validator строится один раз на схему и разделяется всеми
    экземплярами. При нескольких нарушениях пробрасывается наиболее
    релевантное (jsonschema best_match), а не первое найденное.
    """

    _compiled: Dict[str, Draft202012Validator] = {}

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        if schema_name not in self._compiled:
            schema = _SCHEMA_LOADER.load_schema(schema_name)
            self._compiled[schema_name] = Draft202012Validator(schema)
        self.validator = self._compiled[schema_name]

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        error = best_match(self.validator.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: Dict[str, Any]) -> bool:
        """Проверка валидности данных без exception."""
        return self.validator.is_valid(data)


class TransferRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("transfer_record")


class ApprovalRecordValidator(ContractValidator):
    def __init__(self):
        super().__init__("approval_record")


class PermitRequestValidator(ContractValidator):
    def __init__(self):
        super().__init__("permit_request")


class PermitTypedDataValidator(ContractValidator):
    def __init__(self):
        super().__init__("permit_typed_data")


class LedgerSnapshotValidator(ContractValidator):
    def __init__(self):
        super().__init__("ledger_snapshot")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_record(data: Dict[str, Any]) -> None:
    """
    Валидация записи журнала по её полю kind.

    Raises:
        ValidationError: Если данные не соответствуют схеме или kind неизвестен
    """
    kind = data.get("kind")
    if kind == "Transfer":
        TransferRecordValidator().validate(data)
    elif kind == "Approval":
        ApprovalRecordValidator().validate(data)
    else:
        raise ValidationError(f"Unknown record kind: {kind!r}")


def validate_permit_request(data: Dict[str, Any]) -> None:
    """
    Валидация permit payload от relayer.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PermitRequestValidator().validate(data)


def validate_permit_typed_data(data: Dict[str, Any]) -> None:
    """
    Валидация EIP-712 typed data документа.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PermitTypedDataValidator().validate(data)


def validate_ledger_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация снапшота ledger.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    LedgerSnapshotValidator().validate(data)
