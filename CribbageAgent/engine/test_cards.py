import random
import unittest

from CribbageAgent.engine.cards import Card, Deck, Rank, Suit, parse_card, standard_deck


class TestCards(unittest.TestCase):
    def test_values_and_order(self):
        self.assertEqual(Card(Suit.HEARTS, Rank.A).value, 1)
        self.assertEqual(Card(Suit.HEARTS, Rank.R10).value, 10)
        self.assertEqual(Card(Suit.SPADES, Rank.K).value, 10)
        self.assertEqual(Card(Suit.SPADES, Rank.K).order, 13)
        self.assertEqual(Card(Suit.CLUBS, Rank.J).order, 11)

    def test_str(self):
        self.assertEqual(str(Card(Suit.HEARTS, Rank.R10)), "10♥")
        self.assertEqual(str(Card(Suit.SPADES, Rank.Q)), "Q♠")

    def test_parse_card(self):
        self.assertEqual(parse_card("10h"), Card(Suit.HEARTS, Rank.R10))
        self.assertEqual(parse_card("A♦"), Card(Suit.DIAMONDS, Rank.A))
        with self.assertRaises(ValueError):
            parse_card("11H")
        with self.assertRaises(ValueError):
            parse_card("5X")

    def test_standard_deck(self):
        deck = standard_deck()
        self.assertEqual(len(deck), 52)
        self.assertEqual(len(set(deck)), 52)


class TestDeck(unittest.TestCase):
    def test_draw_until_empty(self):
        deck = Deck()
        for _ in range(52):
            deck.draw()
        self.assertEqual(deck.size(), 0)
        with self.assertRaises(RuntimeError):
            deck.draw()

    def test_shuffle_keeps_cards(self):
        deck = Deck(rng=random.Random(7))
        deck.shuffle()
        self.assertEqual(sorted(map(str, deck.cards())), sorted(map(str, standard_deck())))

    def test_cut_is_cyclic(self):
        a, b, c, d = [parse_card(s) for s in ("AH", "2H", "3H", "4H")]
        deck = Deck(cards=[a, b, c, d])
        deck.cut(1)
        self.assertEqual(deck.cards(), [b, c, d, a])
        deck.cut(0)
        self.assertEqual(deck.cards(), [b, c, d, a])

    def test_duplicate_cards_rejected(self):
        with self.assertRaises(ValueError):
            Deck(cards=[parse_card("5H"), parse_card("9S"), parse_card("5H")])
        self.assertEqual(Deck(cards=[parse_card("5H")]).size(), 1)

    def test_random_cut_keeps_cards(self):
        deck = Deck(rng=random.Random(3))
        deck.cut()
        self.assertEqual(deck.size(), 52)
        self.assertEqual(set(deck.cards()), set(standard_deck()))


if __name__ == '__main__':
    unittest.main()
