"""
razvivayka/utils/constants.py

Purpose: Centralized static content

- Reminder message catalog (one list per reminder type)
- City → UTC offset table
- All user-facing bot texts and button labels
- Default values for new users

(Prevents hardcoding across the codebase)
"""

# ============================================================
# DEFAULTS
# ============================================================

DEFAULT_TIME = "19:00"
DEFAULT_TIMEZONE = "Москва"
DEFAULT_OFFSET_HOURS = 3
DEFAULT_REMINDER_TYPE = "motivational"

TIME_PATTERN = r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$"

# ============================================================
# TIMEZONE TABLE
# ============================================================

# Static city → UTC offset (hours). No DST handling.
TIMEZONE_OFFSETS = {
    "Калининград": 2,
    "Москва": 3,
    "Санкт-Петербург": 3,
    "Нижний Новгород": 3,
    "Самара": 4,
    "Екатеринбург": 5,
    "Омск": 6,
    "Новосибирск": 7,
    "Красноярск": 7,
    "Иркутск": 8,
    "Якутск": 9,
    "Владивосток": 10,
    "Магадан": 11,
    "Петропавловск-Камчатский": 12,
}

# ============================================================
# MESSAGE CATALOG
# ============================================================

REMINDER_TYPES = {
    "motivational": "🌟 Мотивирующие",
    "simple": "⏰ Простые",
    "streak": "🏆 С достижениями",
    "playful": "🎮 Игривые",
}

REMINDER_MESSAGES = {
    "motivational": [
        "🌟 Время для развивающих занятий! Каждая минута вместе с ребенком делает его мир больше.",
        "💫 Маленькие шаги каждый день приводят к большим открытиям. Пора заниматься!",
        "🌈 Ваш малыш ждет новых открытий! Уделите ему 15 минут развивающей игры.",
        "🚀 Сегодняшнее занятие — это вклад в завтрашние успехи вашего ребенка.",
        "❤️ Лучший подарок ребенку — ваше время и внимание. Начнем занятие?",
    ],
    "simple": [
        "⏰ Напоминание: время развивающих занятий.",
        "📚 Пора позаниматься с ребенком.",
        "🔔 Время для занятия в Развивайке.",
        "✏️ Не забудьте про сегодняшнее занятие.",
    ],
    "streak": [
        "🏆 Не прерывайте серию! Сегодняшнее занятие приблизит вас к новой награде.",
        "🔥 Вы отлично держите ритм! Продолжим серию занятий сегодня?",
        "🥇 Каждый день занятий — это новое достижение. Добавим еще одно?",
        "📈 Прогресс вашего ребенка растет с каждым днем. Время для следующего шага!",
    ],
    "playful": [
        "🎮 Тук-тук! Это Развивайка. Кто готов играть и учиться?",
        "🧸 Игрушки уже собрались и ждут занятия. Присоединяйтесь!",
        "🦄 Волшебное время игр наступило! Давайте развиваться весело.",
        "🎈 Пссс... Кажется, пора устроить развивающее приключение!",
        "🐻 Мишка спрашивает: а мы сегодня будем заниматься?",
    ],
}

# ============================================================
# TIME PICKER
# ============================================================

TIME_SLOTS = [
    "07:00", "08:00", "09:00",
    "10:00", "11:00", "12:00",
    "15:00", "17:00", "18:00",
    "19:00", "20:00", "21:00",
]

TIME_BUTTONS_PER_ROW = 3
CITY_BUTTONS_PER_ROW = 2

# ============================================================
# MENUS
# ============================================================

WELCOME_MESSAGE = """🌟 *Добро пожаловать в Развивайку!*

Я помогу вам не забывать о развивающих занятиях с ребенком!

Настройте уведомления с помощью кнопок ниже:"""

MAIN_MENU_MESSAGE = """🌟 *Развивайка - Главное меню*

Выберите действие:"""

SETTINGS_MESSAGE = """⚙️ *Настройки уведомлений*

{status_icon} Уведомления: {status_text}
⏰ Время: {time}
🌍 Часовой пояс: {timezone} (UTC+{offset})
💬 Тип сообщений: {type_label}"""

STATUS_MESSAGE = """📊 *Ваш статус*

{status}
⏰ {next_notification}
🌍 Часовой пояс: {timezone}
💬 Тип: {type_label}"""

HELP_MESSAGE = """❓ *Справка*

*Команды:*
/start - Запуск бота
/settings - Настройки уведомлений
/status - Текущий статус
/notify ЧЧ:ММ - Установить время уведомлений
/time - Текущее время
/app - Открыть приложение

*Возможности:*
🔔 Настройка времени уведомлений
🌍 Выбор часового пояса
💬 Разные типы сообщений
📱 Тестирование уведомлений

*Типы уведомлений:*
🌟 Мотивирующие - вдохновляющие сообщения
⏰ Простые - краткие напоминания
🏆 С достижениями - акцент на прогрессе
🎮 Игривые - веселые сообщения

Удачного развития! 🚀"""

TIME_MENU_MESSAGE = "⏰ *Выберите время для уведомлений:*"
TIMEZONE_MENU_MESSAGE = "🌍 *Выберите ваш город:*"
TYPE_MENU_MESSAGE = "💬 *Выберите тип уведомлений:*"

STATUS_ENABLED = "🟢 Включены"
STATUS_DISABLED = "🔴 Выключены"
NEXT_NOTIFICATION = "Следующее уведомление в {time} ({timezone})"
NOTIFICATIONS_OFF = "Уведомления отключены"

# ============================================================
# SHORT REPLIES
# ============================================================

START_FIRST_MESSAGE = "Сначала отправьте /start"
GENERIC_ERROR_MESSAGE = "Произошла ошибка. Попробуйте позже."
CALLBACK_ERROR_TOAST = "Произошла ошибка"

TOGGLED_ON_MESSAGE = "Уведомления включены ✅"
TOGGLED_OFF_MESSAGE = "Уведомления выключены ❌"
TIME_SET_MESSAGE = "⏰ Время установлено: {time}"
TIMEZONE_SET_MESSAGE = "🌍 Город установлен: {timezone}"
TYPE_SET_MESSAGE = "💬 Тип установлен: {type_label}"
TEST_NOTIFICATION_MESSAGE = "🧪 *Тестовое уведомление:*\n\n{message}"

NOTIFY_USAGE_MESSAGE = "❌ Укажите время в формате ЧЧ:ММ, например: /notify 08:15"
NOTIFY_INVALID_MESSAGE = "❌ Неверный формат времени. Используйте ЧЧ:ММ, например: /notify 08:15"
NOTIFY_SUCCESS_MESSAGE = "✅ Время уведомлений установлено: {time}"

TIME_INFO_MESSAGE = """🕐 *Текущее время*

Сервер (UTC): {utc_time}
{timezone} (UTC+{offset}): {local_time}
Ваше время уведомлений: {time}"""

APP_MESSAGE = "📱 Откройте приложение Развивайка, чтобы следить за занятиями:"
APP_UNAVAILABLE_MESSAGE = "📱 Приложение пока недоступно. Попробуйте позже."

# ============================================================
# BUTTONS
# ============================================================

BUTTON_SETTINGS = "⚙️ Настройки уведомлений"
BUTTON_STATUS = "📊 Мой статус"
BUTTON_HELP = "❓ Помощь"
BUTTON_DISABLE = "🔔 Выключить уведомления"
BUTTON_ENABLE = "🔕 Включить уведомления"
BUTTON_TIME = "⏰ Время: {time}"
BUTTON_TIMEZONE = "🌍 Город: {timezone}"
BUTTON_TYPE = "💬 Тип: {type_label}"
BUTTON_TEST = "📱 Тест уведомления"
BUTTON_MAIN_MENU = "🏠 Главное меню"
BUTTON_CHANGE_SETTINGS = "⚙️ Изменить настройки"
BUTTON_BACK_TO_SETTINGS = "◀️ Назад к настройкам"
BUTTON_OPEN_APP = "📱 Открыть Развивайку"
