"""Word sources used to label the board.

A word source only has to answer "give me N unique labels". The built-in
banks are keyed by language code; the board generator picks the bank named
by the session settings.
"""
import random
from typing import Dict, List, Sequence

from .errors import InvalidInput

ENGLISH_WORDS = (
    'AFRICA', 'AGENT', 'AIR', 'ALIEN', 'ALPS', 'AMAZON', 'AMBULANCE', 'AMERICA',
    'ANGEL', 'ANTARCTICA', 'APPLE', 'ARM', 'ATLANTIS', 'AUSTRALIA', 'AZTEC', 'BACK',
    'BALL', 'BAND', 'BANK', 'BAR', 'BARK', 'BAT', 'BATTERY', 'BEACH',
    'BEAR', 'BEAT', 'BED', 'BEIJING', 'BELL', 'BELT', 'BERLIN', 'BERMUDA',
    'BERRY', 'BILL', 'BLOCK', 'BOARD', 'BOLT', 'BOMB', 'BOND', 'BOOM',
    'BOOT', 'BOTTLE', 'BOW', 'BOX', 'BRIDGE', 'BRUSH', 'BUCK', 'BUFFALO',
    'BUG', 'BUGLE', 'BUTTON', 'CALF', 'CANADA', 'CAP', 'CAPITAL', 'CAR',
    'CARD', 'CARROT', 'CASINO', 'CAST', 'CAT', 'CELL', 'CENTAUR', 'CENTER',
    'CHAIR', 'CHANGE', 'CHARGE', 'CHECK', 'CHEST', 'CHICK', 'CHINA', 'CHOCOLATE',
    'CHURCH', 'CIRCLE', 'CLIFF', 'CLOAK', 'CLUB', 'CODE', 'COLD', 'COMIC',
    'COMPOUND', 'CONCERT', 'CONDUCTOR', 'CONTRACT', 'COOK', 'COPPER', 'COTTON', 'COURT',
    'COVER', 'CRANE', 'CRASH', 'CRICKET', 'CROSS', 'CROWN', 'CYCLE', 'DANCE',
    'DATE', 'DAY', 'DEATH', 'DECK', 'DEGREE', 'DIAMOND', 'DICE', 'DINOSAUR',
    'DISEASE', 'DOCTOR', 'DOG', 'DRAFT', 'DRAGON', 'DRESS', 'DRILL', 'DROP',
    'DUCK', 'DWARF', 'EAGLE', 'EGYPT', 'EMBASSY', 'ENGINE', 'ENGLAND', 'EUROPE',
    'EYE', 'FACE', 'FAIR', 'FALL', 'FAN', 'FENCE', 'FIELD', 'FIGHTER',
    'FIGURE', 'FILE', 'FILM', 'FIRE', 'FISH', 'FLUTE', 'FLY', 'FOOT',
    'FORCE', 'FOREST', 'FORK', 'FRANCE', 'GAME', 'GAS', 'GENIUS', 'GERMANY',
    'GHOST', 'GIANT', 'GLASS', 'GLOVE', 'GOLD', 'GRACE', 'GRASS', 'GREECE',
    'GREEN', 'GROUND', 'HAM', 'HAND', 'HAWK', 'HEAD', 'HEART', 'HELICOPTER',
    'HIMALAYAS', 'HOLE', 'HOLLYWOOD', 'HONEY', 'HOOD', 'HOOK', 'HORN', 'HORSE',
    'HORSESHOE', 'HOSPITAL', 'HOTEL', 'ICE', 'ICE CREAM', 'INDIA', 'IRON', 'IVORY',
    'JACK', 'JAM', 'JET', 'JUPITER', 'KANGAROO', 'KETCHUP', 'KEY', 'KID',
    'KING', 'KIWI', 'KNIFE', 'KNIGHT', 'LAB', 'LAP', 'LASER', 'LAWYER',
    'LEAD', 'LEMON', 'LEPRECHAUN', 'LIFE', 'LIGHT', 'LIMOUSINE', 'LINE', 'LINK',
    'LION', 'LITTER', 'LOCH NESS', 'LOCK', 'LOG', 'LONDON', 'LUCK', 'MAIL',
    'MAMMOTH', 'MAPLE', 'MARBLE', 'MARCH', 'MASS', 'MATCH', 'MERCURY', 'MEXICO',
    'MICROSCOPE', 'MILLIONAIRE', 'MINE', 'MINT', 'MISSILE', 'MODEL', 'MOLE', 'MOON',
    'MOSCOW', 'MOUNT', 'MOUSE', 'MOUTH', 'MUG', 'NAIL', 'NEEDLE', 'NET',
    'NEW YORK', 'NIGHT', 'NINJA', 'NOTE', 'NOVEL', 'NURSE', 'NUT', 'OCTOPUS',
    'OIL', 'OLIVE', 'OLYMPUS', 'OPERA', 'ORANGE', 'ORGAN', 'PALM', 'PAN',
    'PANTS', 'PAPER', 'PARACHUTE', 'PARK', 'PART', 'PASS', 'PASTE', 'PENGUIN',
    'PHOENIX', 'PIANO', 'PIE', 'PILOT', 'PIN', 'PIPE', 'PIRATE', 'PISTOL',
    'PIT', 'PITCH', 'PLANE', 'PLASTIC', 'PLATE', 'PLATYPUS', 'PLAY', 'PLOT',
    'POINT', 'POISON', 'POLE', 'POLICE', 'POOL', 'PORT', 'POST', 'POUND',
    'PRESS', 'PRINCESS', 'PUMPKIN', 'PUPIL', 'PYRAMID', 'QUEEN', 'RABBIT', 'RACKET',
    'RAY', 'REVOLUTION', 'RING', 'ROBIN', 'ROBOT', 'ROCK', 'ROME', 'ROOT',
    'ROSE', 'ROULETTE', 'ROUND', 'ROW', 'RULER', 'SATELLITE', 'SATURN', 'SCALE',
    'SCHOOL', 'SCIENTIST', 'SCORPION', 'SCREEN', 'SCUBA DIVER', 'SEAL', 'SERVER', 'SHADOW',
    'SHAKESPEARE', 'SHARK', 'SHIP', 'SHOE', 'SHOP', 'SHOT', 'SINK', 'SKYSCRAPER',
    'SLIP', 'SLUG', 'SMUGGLER', 'SNOW', 'SNOWMAN', 'SOCK', 'SOLDIER', 'SOUL',
    'SOUND', 'SPACE', 'SPELL', 'SPIDER', 'SPIKE', 'SPINE', 'SPOT', 'SPRING',
    'SPY', 'SQUARE', 'STADIUM', 'STAFF', 'STAR', 'STATE', 'STICK', 'STOCK',
    'STRAW', 'STREAM', 'STRIKE', 'STRING', 'SUB', 'SUIT', 'SUPERHERO', 'SWING',
    'SWITCH', 'TABLE', 'TABLET', 'TAG', 'TAIL', 'TAP', 'TEACHER', 'TELESCOPE',
    'TEMPLE', 'THEATER', 'THIEF', 'THUMB', 'TICK', 'TIE', 'TIME', 'TOKYO',
    'TOOTH', 'TORCH', 'TOWER', 'TRACK', 'TRAIN', 'TRIANGLE', 'TRIP', 'TRUNK',
    'TUBE', 'TURKEY', 'UNDERTAKER', 'UNICORN', 'VACUUM', 'VAN', 'VET', 'WAKE',
    'WALL', 'WAR', 'WASHER', 'WASHINGTON', 'WATCH', 'WATER', 'WAVE', 'WEB',
    'WELL', 'WHALE', 'WHIP', 'WIND', 'WITCH', 'WORM', 'YARD', 'ANCHOR',
    'BLANKET', 'CANDLE', 'ENVELOPE', 'GUITAR', 'ISLAND', 'JUNGLE', 'MOUNTAIN', 'RAINBOW',
    'ROCKET', 'SUBMARINE', 'TORNADO', 'VOLCANO', 'WIZARD', 'ZEBRA',
)

HEBREW_WORDS = (
    'כלב', 'חתול', 'סוס', 'פרה', 'כבש', 'עז', 'חמור', 'גמל',
    'פיל', 'אריה', 'נמר', 'זאב', 'שועל', 'דוב', 'ארנב', 'עכבר',
    'חולדה', 'קוף', "ג'ירפה", 'זברה', 'היפופוטם', 'קרנף', 'תנין', 'נחש',
    'צב', 'צפרדע', 'לטאה', 'עטלף', 'ינשוף', 'נשר', 'יונה', 'תוכי',
    'פינגווין', 'ברווז', 'אווז', 'תרנגול', 'תרנגולת', 'טווס', 'עורב', 'דרור',
    'דג', 'כריש', 'לוויתן', 'דולפין', 'תמנון', 'מדוזה', 'סרטן', 'לובסטר',
    'צדפה', 'אלמוג', 'דבורה', 'נמלה', 'פרפר', 'זבוב', 'יתוש', 'עכביש',
    'עקרב', 'חילזון', 'תולעת', 'חיפושית', 'תפוח', 'בננה', 'תפוז', 'לימון',
    'ענבים', 'אבטיח', 'מלון', 'אגס', 'שזיף', 'דובדבן', 'תות', 'אפרסק',
    'רימון', 'תאנה', 'תמר', 'זית', 'אננס', 'מנגו', 'קיווי', 'אבוקדו',
    'עגבנייה', 'מלפפון', 'גזר', 'בצל', 'שום', 'תפוח אדמה', 'חסה', 'כרוב',
    'פלפל', 'חציל', 'דלעת', 'תירס', 'אפונה', 'שעועית', 'עדשים', 'אורז',
    'לחם', 'גבינה', 'חמאה', 'ביצה', 'חלב', 'דבש', 'סוכר', 'מלח',
    'שוקולד', 'עוגה', 'עוגייה', 'גלידה', 'פיצה', 'פלאפל', 'חומוס', 'טחינה',
    'מרק', 'סלט', 'קפה', 'תה', 'מיץ', 'יין', 'בירה', 'מים',
    'בית', 'דירה', 'חדר', 'מטבח', 'סלון', 'מרפסת', 'גג', 'קיר',
    'רצפה', 'תקרה', 'דלת', 'חלון', 'מדרגות', 'מעלית', 'מרתף', 'עליית גג',
    'גינה', 'גדר', 'שער', 'מפתח', 'מנעול', 'כיסא', 'שולחן', 'מיטה',
    'ארון', 'מדף', 'ספה', 'כרית', 'שמיכה', 'מראה', 'מנורה', 'שטיח',
    'וילון', 'אמבטיה', 'מקלחת', 'כיור', 'ברז', 'מגבת', 'סבון', 'מברשת',
    'משחת שיניים', 'מסרק', 'מספריים', 'מחט', 'חוט', 'כפתור', 'רוכסן', 'חגורה',
    'כובע', 'צעיף', 'כפפה', 'גרב', 'נעל', 'מגף', 'סנדל', 'חולצה',
    'מכנסיים', 'שמלה', 'חצאית', 'מעיל', "ז'קט", 'עניבה', 'משקפיים', 'שעון',
    'טבעת', 'שרשרת', 'עגיל', 'צמיד', 'ארנק', 'תיק', 'מזוודה', 'מטרייה',
    'כסף', 'מטבע', 'שטר', 'כרטיס', 'מכתב', 'מעטפה', 'בול', 'עיתון',
    'ספר', 'מחברת', 'עיפרון', 'עט', 'מחק', 'סרגל', 'לוח', 'גיר',
    'מפה', 'גלובוס', 'מחשב', 'מקלדת', 'עכבר מחשב', 'מסך', 'מדפסת', 'טלפון',
    'מצלמה', 'רדיו', 'טלוויזיה', 'שלט', 'סוללה', 'כבל', 'תקע', 'נורה',
    'מאוורר', 'מזגן', 'מקרר', 'תנור', 'כיריים', 'מיקרוגל', 'מכונת כביסה', 'מייבש',
    'שואב אבק', 'מגהץ', 'סיר', 'מחבת', 'צלחת', 'כוס', 'ספל', 'כף',
    'מזלג', 'סכין', 'קערה', 'בקבוק', 'צנצנת', 'קופסה', 'שקית', 'סל',
    'דלי', 'מטאטא', 'חבל', 'סולם', 'פטיש', 'מסמר', 'בורג', 'מברג',
    'מסור', 'מקדחה', 'צבת', 'מגרפה', 'מכונית', 'אוטובוס', 'משאית', 'אופניים',
    'אופנוע', 'רכבת', 'מטוס', 'מסוק', 'ספינה', 'סירה', 'צוללת', 'טיל',
    'חללית', 'רקטה', 'מונית', 'אמבולנס', 'כבאית', 'טרקטור', 'עגלה', 'גלגל',
    'כביש', 'רחוב', 'גשר', 'מנהרה', 'תחנה', 'נמל', 'שדה תעופה', 'רמזור',
    'חניה', 'צומת', 'עיר', 'כפר', 'שכונה', 'מדינה', 'גבול', 'ארמון',
    'טירה', 'מגדל', 'חומה', 'בית ספר', 'גן ילדים', 'אוניברסיטה', 'ספרייה', 'מוזיאון',
    'תיאטרון', 'קולנוע', 'מסעדה', 'בית קפה', 'בית חולים', 'מרפאה', 'בנק', 'דואר',
    'משטרה', 'כלא', 'בית כנסת', 'מסגד', 'כנסייה', 'שוק', 'קניון', 'חנות',
    'מאפייה', 'קצב', 'מספרה', 'מכולת', 'בריכה', 'אצטדיון', 'פארק', 'גן חיות',
    'קרקס', 'יריד', 'מגרש', 'חוף', 'נמל תעופה', 'מפעל', 'משרד', 'מעבדה',
    'חווה', 'ים', 'אגם', 'נהר', 'נחל', 'מעיין', 'מפל', 'אי',
    'חצי אי', 'מדבר', 'יער', "ג'ונגל", 'הר', 'גבעה', 'עמק', 'מערה',
    'צוק', 'הר געש', 'קרחון', 'חול', 'אבן', 'סלע', 'יהלום', 'זהב',
    'ברזל', 'נחושת', 'פלדה', 'עץ', 'ענף', 'עלה', 'שורש', 'פרח',
    'ורד', 'שושנה', 'חמנייה', 'דשא', 'קוץ', 'זרע', 'אגוז', 'בלוט',
    'שמש', 'ירח', 'כוכב', 'כוכב לכת', 'שביט', 'ענן', 'גשם', 'שלג',
    'ברד', 'ברק', 'רעם', 'קשת', 'רוח', 'סערה', 'טורנדו', 'הוריקן',
    'ערפל', 'טל', 'קרח', 'אש', 'עשן', 'אפר', 'חום', 'קור',
    'קיץ', 'חורף', 'סתיו', 'אביב', 'בוקר', 'צהריים', 'ערב', 'לילה',
    'יום', 'שבוע', 'חודש', 'שנה', 'מאה', 'נצח', 'רגע', 'עבר',
    'עתיד', 'הווה', 'זמן', 'מקום', 'שלום', 'מלחמה', 'צבא', 'חייל',
    'קצין', 'גנרל', 'מלך', 'מלכה', 'נסיך', 'נסיכה', 'אביר', 'דרקון',
    'מכשף', 'מכשפה', 'פיה', 'ענק', 'גמד', 'רוח רפאים', 'ערפד', 'זומבי',
    'חייזר', 'רובוט', 'גיבור', 'נבל', 'פיראט', 'שודד', 'בלש', 'מרגל',
    "נינג'ה", 'סמוראי', 'קאובוי', 'אינדיאני', 'טייס', 'אסטרונאוט', 'רופא', 'אחות',
    'מורה', 'גנן', 'טבח', 'אופה', 'נגר', 'חשמלאי', 'שרברב', 'צייר',
    'פסל', 'משורר', 'סופר', 'זמר', 'רקדן', 'שחקן', 'ליצן', 'קוסם',
    'שופט', 'עורך דין', 'שוטר', 'כבאי', 'דוור', 'נהג', 'מלצר', 'מדען',
    'ממציא', 'חקלאי', 'רועה', 'דייג', 'צייד', 'כומר', 'רב', 'נביא',
    'מלאך', 'שטן', 'אל', 'אלה', 'מפלצת', 'חד קרן', 'בת ים', 'ראש',
    'פנים', 'עין', 'אוזן', 'אף', 'פה', 'שן', 'לשון', 'שפה',
    'לחי', 'סנטר', 'מצח', 'שיער', 'זקן', 'שפם', 'צוואר', 'כתף',
    'זרוע', 'מרפק', 'יד', 'אצבע', 'ציפורן', 'חזה', 'בטן', 'גב',
    'ירך', 'ברך', 'רגל', 'קרסול', 'עקב', 'לב', 'ריאה', 'כבד',
    'כליה', 'מוח', 'עצם', 'שריר', 'עור', 'דם', 'עצב', 'כדור',
    'כדורגל', 'כדורסל', 'טניס', 'שחמט', 'קלף', 'קובייה', 'פאזל', 'בובה',
    'צעצוע', 'עפיפון', 'נדנדה', 'מגלשה', 'סקייטבורד', 'מחבט', 'רשת', 'גביע',
    'מדליה', 'פרס', 'גיטרה', 'פסנתר', 'כינור', 'תוף', 'חליל', 'חצוצרה',
    'מפוחית', 'תזמורת', 'מקהלה', 'שיר', 'מנגינה', 'ריקוד', 'הצגה', 'סרט',
    'תמונה', 'ציור', 'במה', 'מסכה', 'תחפושת', 'כתר', 'שרביט', 'חרב',
    'מגן', 'קשת וחץ', 'רובה', 'אקדח', 'פצצה', 'תותח', 'טנק', 'מטוס קרב',
    'אוצר', 'מפת אוצר', 'מצפן', 'משקפת', 'טלסקופ', 'מיקרוסקופ', 'מגנט', 'זכוכית מגדלת',
    'שעון חול', 'נר', 'לפיד', 'פנס', 'מנורת לילה', 'זיקוקין', 'בלון', 'מתנה',
    'חגיגה', 'חתונה', 'יום הולדת', 'פסטיבל', 'מסיבה', 'טקס', 'נאום', 'חלום',
    'סוד', 'חידה', 'קסם', 'מזל', 'גורל', 'נשמה', 'זיכרון', 'רעיון',
    'תקווה', 'פחד', 'אהבה', 'שנאה', 'שמחה', 'כעס', 'אומץ', 'סבלנות',
    'חוכמה', 'טיפשות',
)


class WordSource:
    """A fixed pool of unique labels to sample boards from."""

    def __init__(self, words: Sequence[str]):
        self.words = tuple(dict.fromkeys(words))

    def __len__(self):
        return len(self.words)

    def sample(self, count: int, rng=None) -> List[str]:
        if count > len(self.words):
            raise InvalidInput(
                f'Word list has {len(self.words)} words but the board needs {count}'
            )
        rng = rng or random
        return rng.sample(self.words, count)


WORD_BANKS: Dict[str, WordSource] = {
    'en': WordSource(ENGLISH_WORDS),
    'he': WordSource(HEBREW_WORDS),
}


def get_word_source(language: str) -> WordSource:
    source = WORD_BANKS.get(language)
    if source is None:
        raise InvalidInput(f'Unsupported language: {language}')
    return source
