import pytest

from core import config
from core.i18n import Translator, has_translation, load_translations, normalize_locale, t
from core.schema import GROUP
from core.steps import ALL_STEPS, FORM


def _keys(node, prefix=""):
    for name, value in node.items():
        path = f"{prefix}{name}"
        if isinstance(value, dict):
            yield from _keys(value, path + ".")
        else:
            yield path


def test_english_translation_loaded():
    assert t("common.next", "en") == "Next"
    assert t("common.next", "ja") == "次へ"
    assert t("UnknownKey", "en") == "UnknownKey"


def test_missing_locale_falls_back_to_default():
    assert t("common.next", "fr") == "次へ"


def test_interpolation():
    assert t("common.stepOf", "en", current=2, total=10) == "Step 2 of 10"


def test_bad_interpolation_returns_template():
    assert t("common.stepOf", "en", current=2) == "Step {current} of {total}"


def test_normalize_locale():
    assert normalize_locale("vi") == "vi"
    assert normalize_locale("de") == config.DEFAULT_LOCALE
    assert normalize_locale(None) == config.DEFAULT_LOCALE


def test_translator_scoped():
    tr = Translator("en").scoped("newApplication.step2")
    assert tr("fields.passportNumber") == "Passport number"
    assert tr.has("errors.passportExpiryInvalid")
    assert not tr.has("errors.nothingHere")


@pytest.mark.parametrize("lang", ["en", "zh", "vi"])
def test_catalogs_have_same_keys(lang):
    assert set(_keys(load_translations(lang))) == set(_keys(load_translations("ja")))


def _referenced_keys():
    for step in ALL_STEPS:
        ns = step.namespace
        yield f"{ns}.title"
        for spec in step.fields:
            specs = spec.children if spec.kind == GROUP else (spec,)
            if spec.kind == GROUP:
                yield f"{ns}.groups.{spec.name}"
            for s in specs:
                if step.kind == FORM or step.kind == "chooser":
                    yield f"{ns}.fields.{s.name}"
                for key in (s.required, s.invalid, s.too_short):
                    if key:
                        yield key
                for option in s.options:
                    if option not in ("yes", "no"):
                        yield f"{ns}.options.{s.name}.{option}"
        for slot in step.files:
            yield slot.label
            if slot.error:
                yield slot.error
        if step.files_error:
            yield step.files_error


@pytest.mark.parametrize("key", sorted(set(_referenced_keys())))
def test_step_keys_are_translated(key):
    assert has_translation(key, "ja"), key
