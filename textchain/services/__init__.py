from textchain.services.coding_dict import (
    DICTIONARY_TYPES,
    CodingDictionary,
    FlyweightCodingDictionary,
    IdentityCodingDictionary,
    IntArrayCodingDictionary,
    IntHashArrayCodingDictionary,
    ShortArrayCodingDictionary,
    ShortArrayCodingDictionaryUtf8,
    ShortHashArrayCodingDictionary,
    ShortHashArrayCodingDictionaryUtf8,
    create_dictionary,
)
from textchain.services.markov_chain import (
    ChainStats,
    MarkovChain,
    UntrainedChainError,
    train_from_corpus,
)
from textchain.services.state import State, create_state, lookup_state
from textchain.services.tokenizer import RandomSource, Tokenizer, WhitespaceTokenizer
from textchain.services.transition_table import TransitionTable
