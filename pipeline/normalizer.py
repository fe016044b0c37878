from typing import Iterable


class TextNormalizer:
    def __init__(self):
        # OCR이 일본어 문장부호를 반각으로 읽는 경우 교정
        self.replace_map = {
            " ": "",
            "?": "？",
            "!": "！",
            "/": "ノ",
            "・・・・・・": "……",
            "・・・": "…",
            "・・": "…",
        }
        self.strip_chars = ("0", "|")

    def normalize_line(self, line: str) -> str:
        if not line:
            return ""

        t = line
        for k, v in self.replace_map.items():
            t = t.replace(k, v)

        for ch in self.strip_chars:
            t = t.strip(ch)

        return t

    def normalize(self, lines: Iterable[str], combine_lines: bool = False) -> str:
        cleaned = [self.normalize_line(line.strip()) for line in lines]
        cleaned = [c for c in cleaned if c]

        if combine_lines:
            return "".join(cleaned)
        return "\n".join(cleaned)
