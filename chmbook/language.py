"""Locale identifiers understood by the HTML Help compiler.

See https://www.w3.org/International/ms-lang.html for the source table.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LANGUAGE_CODE = "en-us"

LANGUAGES: dict[str, tuple[int, str]] = {
    "af": (0x436, "Afrikaans"),
    "sq": (0x41c, "Albanian"),
    "ar": (0x1, "Arabic (Standard)"),
    "ar-sa": (0x401, "Arabic (Saudi Arabia)"),
    "ar-iq": (0x801, "Arabic (Iraq)"),
    "ar-eg": (0x0c01, "Arabic (Egypt)"),
    "ar-ly": (0x1001, "Arabic (Libya)"),
    "ar-dz": (0x1401, "Arabic (Algeria)"),
    "ar-ma": (0x1801, "Arabic (Morocco)"),
    "ar-tn": (0x1c01, "Arabic (Tunisia)"),
    "ar-om": (0x2001, "Arabic (Oman)"),
    "ar-ye": (0x2401, "Arabic (Yemen)"),
    "ar-sy": (0x2801, "Arabic (Syria)"),
    "ar-jo": (0x2c01, "Arabic (Jordan)"),
    "ar-lb": (0x3001, "Arabic (Lebanon)"),
    "ar-kw": (0x3401, "Arabic (Kuwait)"),
    "ar-ae": (0x3801, "Arabic (U.A.E.)"),
    "ar-bh": (0x3c01, "Arabic (Bahrain)"),
    "ar-qa": (0x4001, "Arabic (Qatar)"),
    "eu": (0x42d, "Basque"),
    "bg": (0x402, "Bulgarian"),
    "be": (0x423, "Belarusian"),
    "ca": (0x403, "Catalan"),
    "zh": (0x4, "Chinese"),
    "zh-tw": (0x404, "Chinese (Taiwan)"),
    "zh-cn": (0x804, "Chinese (PRC)"),
    "zh-hk": (0x0c04, "Chinese (Hong Kong)"),
    "zh-sg": (0x1004, "Chinese (Singapore)"),
    "hr": (0x41a, "Croatian"),
    "cs": (0x405, "Czech"),
    "da": (0x406, "Danish"),
    "nl": (0x413, "Dutch (Standard)"),
    "nl-be": (0x813, "Dutch (Belgian)"),
    "en": (0x9, "English"),
    "en-us": (0x409, "English (United States)"),
    "en-gb": (0x809, "English (British)"),
    "en-au": (0x0c09, "English (Australian)"),
    "en-ca": (0x1009, "English (Canadian)"),
    "en-nz": (0x1409, "English (New Zealand)"),
    "en-ie": (0x1809, "English (Ireland)"),
    "en-za": (0x1c09, "English (South Africa)"),
    "en-jm": (0x2009, "English (Jamaica)"),
    "en-bz": (0x2809, "English (Belize)"),
    "en-tt": (0x2c09, "English (Trinidad)"),
    "et": (0x425, "Estonian"),
    "fo": (0x438, "Faeroese"),
    "fa": (0x429, "Farsi"),
    "fi": (0x40b, "Finnish"),
    "fr": (0x40c, "French (Standard)"),
    "fr-be": (0x80c, "French (Belgian)"),
    "fr-ca": (0x0c0c, "French (Canadian)"),
    "fr-ch": (0x100c, "French (Swiss)"),
    "fr-lu": (0x140c, "French (Luxembourg)"),
    "gd": (0x43c, "Gaelic (Scots)"),
    "de": (0x407, "German (Standard)"),
    "de-ch": (0x807, "German (Swiss)"),
    "de-at": (0x0c07, "German (Austrian)"),
    "de-lu": (0x1007, "German (Luxembourg)"),
    "de-li": (0x1407, "German (Liechtenstein)"),
    "el": (0x408, "Greek"),
    "he": (0x40d, "Hebrew"),
    "hi": (0x439, "Hindi"),
    "hu": (0x40e, "Hungarian"),
    "is": (0x40f, "Icelandic"),
    "id": (0x421, "Indonesian"),
    "it": (0x410, "Italian (Standard)"),
    "it-ch": (0x810, "Italian (Swiss)"),
    "ja": (0x411, "Japanese"),
    "ko": (0x412, "Korean"),
    "lv": (0x426, "Latvian"),
    "lt": (0x427, "Lithuanian"),
    "mk": (0x42f, "Macedonian"),
    "ms": (0x43e, "Malaysian"),
    "mt": (0x43a, "Maltese"),
    "nb": (0x414, "Norwegian (Bokmal)"),
    "pl": (0x415, "Polish"),
    "pt-br": (0x416, "Portuguese (Brazilian)"),
    "pt": (0x816, "Portuguese (Standard)"),
    "rm": (0x417, "Rhaeto-Romanic"),
    "ro": (0x418, "Romanian"),
    "ro-mo": (0x818, "Romanian (Moldavia)"),
    "ru": (0x419, "Russian"),
    "ru-mo": (0x819, "Russian (Moldavia)"),
    "sr": (0x0c1a, "Serbian"),
    "sk": (0x41b, "Slovak"),
    "sl": (0x424, "Slovenian"),
    "sb": (0x42e, "Sorbian"),
    "es": (0x40a, "Spanish (Spain - Modern Sort)"),
    "es-mx": (0x80a, "Spanish (Mexican)"),
    "es-gt": (0x100a, "Spanish (Guatemala)"),
    "es-cr": (0x140a, "Spanish (Costa Rica)"),
    "es-pa": (0x180a, "Spanish (Panama)"),
    "es-do": (0x1c0a, "Spanish (Dominican Republic)"),
    "es-ve": (0x200a, "Spanish (Venezuela)"),
    "es-co": (0x240a, "Spanish (Colombia)"),
    "es-pe": (0x280a, "Spanish (Peru)"),
    "es-ar": (0x2c0a, "Spanish (Argentina)"),
    "es-ec": (0x300a, "Spanish (Ecuador)"),
    "es-cl": (0x340a, "Spanish (Chile)"),
    "es-uy": (0x380a, "Spanish (Uruguay)"),
    "es-py": (0x3c0a, "Spanish (Paraguay)"),
    "es-bo": (0x400a, "Spanish (Bolivia)"),
    "es-sv": (0x440a, "Spanish (El Salvador)"),
    "es-hn": (0x480a, "Spanish (Honduras)"),
    "es-ni": (0x4c0a, "Spanish (Nicaragua)"),
    "es-pr": (0x500a, "Spanish (Puerto Rico)"),
    "sx": (0x430, "Sutu"),
    "sv": (0x41d, "Swedish"),
    "sv-fi": (0x81d, "Swedish (Finland)"),
    "th": (0x41e, "Thai"),
    "ts": (0x431, "Tsonga"),
    "tn": (0x432, "Tswana"),
    "tr": (0x41f, "Turkish"),
    "uk": (0x422, "Ukrainian"),
    "ur": (0x420, "Urdu"),
    "vi": (0x42a, "Vietnamese"),
    "xh": (0x434, "Xhosa"),
    "ji": (0x43d, "Yiddish"),
    "zu": (0x435, "Zulu"),
}


@dataclass(frozen=True, slots=True)
class ChmLanguage:
    """A legacy locale: short code, numeric LCID and display name."""

    code: str
    lcid: int
    name: str

    @classmethod
    def from_code(cls, code: str | None) -> "ChmLanguage | None":
        """Look up a language by short code, ignoring case."""
        if not code:
            return None
        key = code.strip().lower()
        entry = LANGUAGES.get(key)
        if entry is None:
            return None
        lcid, name = entry
        return cls(code=key, lcid=lcid, name=name)

    @classmethod
    def default(cls) -> "ChmLanguage":
        lcid, name = LANGUAGES[DEFAULT_LANGUAGE_CODE]
        return cls(code=DEFAULT_LANGUAGE_CODE, lcid=lcid, name=name)

    @classmethod
    def resolve(cls, code: str | None) -> "ChmLanguage":
        """Return the language for ``code``, falling back to en-us."""
        return cls.from_code(code) or cls.default()

    def __str__(self) -> str:
        return f"{self.lcid:x} {self.name}"
