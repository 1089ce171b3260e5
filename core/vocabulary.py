"""Static word bank and grammar quiz topics."""

from .config import LEVELS
from .models import AssessmentTopic, Question, WordItem

# English to Ukrainian vocabulary by proficiency level.
# Rows: (id, english, ukrainian, transcription, example)
WORD_BANK_DATA = {
    'beginner': [
        (1, 'apple', 'яблуко', '/ˈæp.əl/', 'I eat an apple every morning.'),
        (2, 'house', 'будинок', '/haʊs/', 'Their house is near the river.'),
        (3, 'water', 'вода', '/ˈwɔː.tər/', 'Can I have a glass of water?'),
        (4, 'friend', 'друг', '/frend/', 'She is my best friend.'),
        (5, 'book', 'книга', '/bʊk/', 'This book is very interesting.'),
        (6, 'dog', 'собака', '/dɒɡ/', 'The dog is sleeping on the sofa.'),
        (7, 'school', 'школа', '/skuːl/', 'We walk to school together.'),
        (8, 'city', 'місто', '/ˈsɪt.i/', 'Kyiv is a big city.'),
        (9, 'family', 'родина', '/ˈfæm.əl.i/', 'My family lives in Lviv.'),
        (10, 'morning', 'ранок', '/ˈmɔː.nɪŋ/', 'Good morning, everyone!'),
        (11, 'bread', 'хліб', '/bred/', 'We need some bread for dinner.'),
        (12, 'happy', 'щасливий', '/ˈhæp.i/', 'The children look happy today.'),
    ],
    'intermediate': [
        (101, 'journey', 'подорож', '/ˈdʒɜː.ni/', 'The journey took three days.'),
        (102, 'improve', 'покращувати', '/ɪmˈpruːv/', 'I want to improve my English.'),
        (103, 'advice', 'порада', '/ədˈvaɪs/', 'Thank you for your advice.'),
        (104, 'borrow', 'позичати', '/ˈbɒr.əʊ/', 'Can I borrow your pen?'),
        (105, 'decision', 'рішення', '/dɪˈsɪʒ.ən/', 'It was a difficult decision.'),
        (106, 'environment', 'довкілля', '/ɪnˈvaɪ.rən.mənt/', 'We must protect the environment.'),
        (107, 'opportunity', 'можливість', '/ˌɒp.əˈtʃuː.nə.ti/', 'This job is a great opportunity.'),
        (108, 'suggest', 'пропонувати', '/səˈdʒest/', 'I suggest we leave early.'),
        (109, 'reliable', 'надійний', '/rɪˈlaɪ.ə.bəl/', 'He is a reliable colleague.'),
        (110, 'schedule', 'розклад', '/ˈʃedʒ.uːl/', 'Check the train schedule.'),
    ],
    'advanced': [
        (201, 'ubiquitous', 'всюдисущий', '/juːˈbɪk.wɪ.təs/', 'Smartphones have become ubiquitous.'),
        (202, 'meticulous', 'ретельний', '/məˈtɪk.jə.ləs/', 'She is meticulous about details.'),
        (203, 'ambiguous', 'неоднозначний', '/æmˈbɪɡ.ju.əs/', 'The ending of the film is ambiguous.'),
        (204, 'resilience', 'стійкість', '/rɪˈzɪl.i.əns/', 'The team showed great resilience.'),
        (205, 'scrutinize', 'ретельно вивчати', '/ˈskruː.tɪ.naɪz/', 'Lawyers scrutinize every contract.'),
        (206, 'inevitable', 'неминучий', '/ɪˈnev.ɪ.tə.bəl/', 'Change is inevitable.'),
        (207, 'eloquent', 'красномовний', '/ˈel.ə.kwənt/', 'He gave an eloquent speech.'),
        (208, 'pragmatic', 'прагматичний', '/præɡˈmæt.ɪk/', 'We need a pragmatic solution.'),
        (209, 'alleviate', 'полегшувати', '/əˈliː.vi.eɪt/', 'The medicine will alleviate the pain.'),
        (210, 'candid', 'відвертий', '/ˈkæn.dɪd/', 'Thank you for your candid answer.'),
    ],
}

# Grammar quizzes: (question, options, answer)
QUIZ_DATA = {
    'toBe': {
        'title': 'To Be Verb',
        'description': 'am, is, are',
        'questions': [
            ('I ___ a student.', ['am', 'is', 'are'], 'am'),
            ('She ___ my sister.', ['am', 'is', 'are'], 'is'),
            ('They ___ at home.', ['am', 'is', 'are'], 'are'),
            ('We ___ happy today.', ['is', 'are', 'am'], 'are'),
            ('It ___ cold outside.', ['are', 'is', 'am'], 'is'),
            ('You ___ very kind.', ['is', 'am', 'are'], 'are'),
            ('He ___ not hungry.', ['is', 'are', 'am'], 'is'),
            ('The books ___ on the table.', ['is', 'are', 'am'], 'are'),
            ('My name ___ Olena.', ['are', 'am', 'is'], 'is'),
            ('I ___ not tired.', ['is', 'am', 'are'], 'am'),
        ]
    },
    'pronouns': {
        'title': 'Pronouns',
        'description': 'I, you, he, she',
        'questions': [
            ('___ is my brother. His name is Taras.', ['He', 'She', 'It'], 'He'),
            ('This is Anna. ___ is a doctor.', ['He', 'She', 'They'], 'She'),
            ('Look at the cat! ___ is so cute.', ['It', 'He', 'They'], 'It'),
            ('My parents are teachers. ___ work at a school.', ['We', 'They', 'He'], 'They'),
            ('Can you help ___? I am lost.', ['me', 'I', 'my'], 'me'),
            ('This bag is ___.', ['my', 'mine', 'me'], 'mine'),
            ('We love ___ new flat.', ['our', 'us', 'ours'], 'our'),
            ('Call ___ tomorrow, they are busy now.', ['they', 'them', 'their'], 'them'),
        ]
    },
    'articles': {
        'title': 'Articles',
        'description': 'a, an, the',
        'questions': [
            ('I saw ___ elephant at the zoo.', ['a', 'an', 'the'], 'an'),
            ('She has ___ new car.', ['a', 'an', 'the'], 'a'),
            ('___ sun rises in the east.', ['A', 'An', 'The'], 'The'),
            ('He is ___ honest man.', ['a', 'an', 'the'], 'an'),
            ('Can you close ___ door, please?', ['a', 'an', 'the'], 'the'),
            ('I need ___ umbrella.', ['a', 'an', 'the'], 'an'),
            ('She plays ___ piano beautifully.', ['a', 'an', 'the'], 'the'),
            ('We live in ___ small village.', ['a', 'an', 'the'], 'a'),
        ]
    },
    'presentSimple': {
        'title': 'Present Simple',
        'description': 'Daily routine',
        'questions': [
            ('She ___ coffee every morning.', ['drink', 'drinks', 'drinking'], 'drinks'),
            ('They ___ to work by bus.', ['go', 'goes', 'going'], 'go'),
            ('He ___ not like fish.', ['do', 'does', 'is'], 'does'),
            ('___ you speak English?', ['Do', 'Does', 'Are'], 'Do'),
            ('My brother ___ football on Sundays.', ['play', 'plays', 'playing'], 'plays'),
            ('I ___ up at seven o\'clock.', ['get', 'gets', 'getting'], 'get'),
            ('The shop ___ at nine.', ['open', 'opens', 'opening'], 'opens'),
            ('___ she live in Odesa?', ['Do', 'Does', 'Is'], 'Does'),
            ('We ___ dinner at six.', ['have', 'has', 'having'], 'have'),
            ('It ___ a lot in autumn.', ['rain', 'rains', 'raining'], 'rains'),
        ]
    },
}


def _build_word_bank() -> dict[str, list[WordItem]]:
    bank = {}
    for level in LEVELS:
        bank[level] = [WordItem(*row) for row in WORD_BANK_DATA.get(level, [])]
    return bank


def _build_topics() -> dict[str, AssessmentTopic]:
    topics = {}
    for topic_id, data in QUIZ_DATA.items():
        topic = AssessmentTopic(
            topic_id,
            data['title'],
            [Question(prompt, options, answer) for prompt, options, answer in data['questions']],
            data.get('description', '')
        )
        topic.validate()
        topics[topic_id] = topic
    return topics


WORD_BANK = _build_word_bank()
QUIZ_TOPICS = _build_topics()
_WORDS_BY_ID = {word.id: word for words in WORD_BANK.values() for word in words}


def get_levels() -> list[str]:
    """Return level names in difficulty order."""
    return list(LEVELS)


def get_words(level: str) -> list[WordItem]:
    """Return the word list for a level, or an empty list for unknown levels."""
    return list(WORD_BANK.get(level, []))


def get_word(word_id: int) -> WordItem | None:
    """Look up a single word by id."""
    return _WORDS_BY_ID.get(word_id)


def get_topics() -> list[dict]:
    """Return topic summaries in catalog order."""
    return [topic.summary() for topic in QUIZ_TOPICS.values()]
