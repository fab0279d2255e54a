# utils/tokenizer.py

from typing import List


class CommandTokenizer:
    """
    Токенизатор входной строки для грамматики команд.
    Строка делится строго по одиночному пробелу: кавычки не
    поддерживаются, пустые токены сохраняются ("help " -> ["help", ""]).
    """

    separator = " "

    def tokenize(self, text: str) -> List[str]:
        """
        Разбивает текст на токены.
        """
        if text is None:
            text = ""
        return text.split(self.separator)

    def tokenize_with_positions(self, text: str) -> List[dict]:
        """
        Возвращает токены с их позициями в исходном тексте.
        """
        tokens = []
        start = 0
        for token in self.tokenize(text):
            end = start + len(token)
            tokens.append({
                'token': token,
                'start': start,
                'end': end
            })
            start = end + len(self.separator)
        return tokens

    def last_word(self, text: str) -> str:
        return self.tokenize(text)[-1]

    def word_before_cursor(self, text: str, cursor: int = None) -> str:
        """
        Часть слова слева от курсора, которую заменит выбранная подсказка.
        """
        if cursor is None:
            cursor = len(text)
        before = text[:cursor]
        return before[before.rfind(self.separator) + 1:]


default_tokenizer = CommandTokenizer()
