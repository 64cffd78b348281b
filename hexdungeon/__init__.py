"""
hexdungeon - silnik turowej gry planszowej na siatce hex.

Gracz i bot rzucają kostką i idą tą samą ścieżką przez planszę
pełną goblinów. Kto pierwszy stanie na ostatnim polu - wygrywa.

Podpakiety:
- core: współrzędne hex, siatka, budowa ścieżki, RNG, konfiguracja
- board: gobliny, mgła wojny, pipeline budowy planszy
- agents: gracz / bot i AI bota
- combat: spotkania z goblinami
- events: dziennik zdarzeń JSON
- game: maszyna tur, silnik, sesja, styk z prezentacją
"""

__version__ = "1.0.0"
