"""Canonical document model.

Every element of a parsed document is an immutable Pydantic model.
"""

from .actions import Action, CustomAction, NavigateAction, ResetAction, SubmitAction
from .common import ConfirmConfig, FieldValidation, LayoutConfig, SelectOption
from .documents import CommonComponent, ComponentParam, Document, ValidationRule
from .fields import FIELD_VARIANTS, BaseInputField, InputField, UnrecognizedField, field_adapter
from .screens import (
    AppHeaderConfig,
    AppNaviConfig,
    FormSection,
    ScreenDefinition,
    WizardConfig,
    WizardStep,
)

__all__ = (
    'FIELD_VARIANTS',
    'Action',
    'AppHeaderConfig',
    'AppNaviConfig',
    'BaseInputField',
    'CommonComponent',
    'ComponentParam',
    'ConfirmConfig',
    'CustomAction',
    'Document',
    'FieldValidation',
    'FormSection',
    'InputField',
    'LayoutConfig',
    'NavigateAction',
    'ResetAction',
    'ScreenDefinition',
    'SelectOption',
    'SubmitAction',
    'UnrecognizedField',
    'ValidationRule',
    'WizardConfig',
    'WizardStep',
)
