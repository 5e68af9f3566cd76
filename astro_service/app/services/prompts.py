"""Prompt and fallback templates for each service type.

Templates are ``str.format`` strings. Fallbacks are the hand-written texts
served whenever the generator is unavailable.
"""

PROMPT_TEMPLATES = {
    "daily_horoscope": (
        "Write a short daily horoscope for the zodiac sign {zodiac_sign} for today. "
        "Make it positive and motivating, 150-200 words long."
    ),
    "weekly_horoscope": (
        "Write a detailed weekly horoscope for the zodiac sign {zodiac_sign}. "
        "Describe the main trends in personal life, work, health and finances "
        "for the coming week. Length 300-400 words."
    ),
    "compatibility": (
        "Analyze the compatibility between the zodiac signs {first_sign} and {second_sign}. "
        "Describe the strengths and weaknesses of this relationship and its potential "
        "in love, friendship and work. Give concrete recommendations for harmony. "
        "Length 250-300 words."
    ),
    "tarot": (
        'Give a psychological analysis using Tarot cards for the "{spread_type}" spread. '
        "Offer wise advice and an interpretation that helps with personal growth and "
        "decision making. Be supportive and insightful. Length 300-350 words."
    ),
    "natal_chart": (
        "Analyze the natal chart of a person born on {birth_date} in {birth_place}. "
        "Describe the main character traits, talents, potential and possible life lessons. "
        "Give recommendations for self-development and realizing that potential. "
        "Length 400-500 words."
    ),
}

# (temperature, maxOutputTokens)
GENERATION_CONFIG = {
    "daily_horoscope": (0.7, 2000),
    "weekly_horoscope": (0.7, 2000),
    "compatibility": (0.7, 2000),
    "tarot": (0.8, 2000),
    "natal_chart": (0.7, 2500),
}

FALLBACK_TEMPLATES = {
    "daily_horoscope": (
        "✨ Today's horoscope for {zodiac_sign}:\n\n"
        "Today brings you new opportunities! The stars favor bold decisions and active steps. "
        "In the first half of the day focus on important tasks; the afternoon is a time "
        "for creativity and communication.\n\n"
        "Tip of the day: trust your intuition and don't be afraid to take the initiative. "
        "Today is an especially good time to start new projects and make important connections.\n\n"
        "Energy of the day: ⭐⭐⭐⭐☆\n"
        "Have a great day! 🌟"
    ),
    "weekly_horoscope": (
        "✨ Weekly horoscope for {zodiac_sign}:\n\n"
        "Interesting events await you this week! Monday and Tuesday are for planning and "
        "organizing. Wednesday and Thursday bring unexpected professional opportunities. "
        "Friday is ideal for social activity and meeting friends.\n\n"
        "Over the weekend make time for rest and self-development. Important insights may "
        "come that help your personal growth.\n\n"
        "Finances: stable, with a chance of unexpected income.\n"
        "Health: keep an eye on the balance between work and rest.\n\n"
        "Have a great week! 🌟"
    ),
    "compatibility": (
        "💑 Compatibility of {first_sign} and {second_sign}:\n\n"
        "These two signs have good potential for a harmonious relationship!\n\n"
        "🌟 Strengths:\n"
        "• Mutual respect and understanding\n"
        "• Shared interests and values\n"
        "• Ability to support each other in difficult moments\n\n"
        "⚠️ Weaknesses:\n"
        "• Possible disagreements over everyday matters\n"
        "• Occasional misunderstandings due to different temperaments\n\n"
        "💡 Recommendations:\n"
        "• Learn to listen to and hear each other\n"
        "• Find time for shared leisure and hobbies\n"
        "• Respect your partner's personal space\n"
        "• Discuss arising issues openly\n\n"
        "Overall compatibility: 85% ⭐\n"
        "Love: 80% ❤️\n"
        "Friendship: 90% 🤝\n"
        "Work: 75% 💼"
    ),
    "tarot": (
        "🃏 Tarot spread: {spread_type}\n\n"
        "The cards show that you are at an important stage of your path! Now is the time "
        "for deep self-reflection and well-considered decisions.\n\n"
        "✨ Key messages:\n"
        "• Strength points to your inner wisdom and ability to overcome challenges\n"
        "• The Star symbolizes hope and new opportunities on the horizon\n"
        "• The World speaks of completed cycles and reaching harmony\n\n"
        "💫 Advice of the cards:\n"
        "• Keep a balance between action and waiting\n"
        "• Trust your intuition when making decisions\n"
        "• Don't be afraid to ask loved ones for help\n"
        "• Make time for meditation and self-reflection\n\n"
        "Remember: the cards only show potential, the final choice is always yours!"
    ),
    "natal_chart": (
        "🌌 Natal chart for birth date {birth_date}\n\n"
        "Your birth chart points to a strong, many-sided personality with great potential!\n\n"
        "✨ Main traits:\n"
        "• Strong leadership qualities and determination\n"
        "• Developed intuition and empathy\n"
        "• A creative approach to problem solving\n"
        "• The ability to inspire others\n\n"
        "🌟 Talents and abilities:\n"
        "• Communication skills and a gift of persuasion\n"
        "• An analytical mind\n"
        "• An artistic perception of the world\n"
        "• The ability to learn quickly\n\n"
        "💫 Recommendations for growth:\n"
        "• Develop your public speaking skills\n"
        "• Make time for continuous self-education\n"
        "• Balance work and rest to keep your energy up\n"
        "• Develop your emotional intelligence\n\n"
        "🎯 Life lessons:\n"
        "• Learn to delegate\n"
        "• Be patient in reaching your goals\n"
        "• Balance logic and intuition\n\n"
        "Good luck on your path of self-development! 💫"
    ),
}

GENERIC_FALLBACK = "Service content not available"
