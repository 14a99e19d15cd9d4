"""WordNet lookup service — builds synset records from the lexicon port."""

import logging

from domain.model.errors import LexiconError
from domain.model.lexicon import SynsetLookup, SynsetRecord
from port.lexicon import LexiconPort

logger = logging.getLogger(__name__)


async def lookup_synsets(lexicon: LexiconPort, pos: str, word: str) -> SynsetLookup:
    """Look up every sense of word as pos.

    Returns a SynsetLookup whose synsets is None when the lexicon has no
    entry. A sense whose hypernym traversal fails keeps its id and
    definition with an empty hypernym list.

    Raises:
        ValidationError: pos is not a supported part-of-speech label.
    """
    senses = await lexicon.lookup_senses(pos, word)
    if senses is None:
        logger.info("Word not found in lexicon", extra={"word": word, "pos": pos})
        return SynsetLookup(word=word)

    records = []
    for sense in senses:
        sense_id = lexicon.sense_id(sense)
        try:
            hypernyms = lexicon.hypernyms(sense)
        except LexiconError as e:
            logger.warning("Hypernym lookup failed, returning sense without hypernyms",
                           extra={"sense_id": sense_id, "error": str(e)})
            hypernyms = []
        records.append(SynsetRecord(
            id=sense_id,
            definition=lexicon.definition(sense),
            hypernyms=hypernyms,
        ))

    return SynsetLookup(word=word, synsets=records)
