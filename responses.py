# responses.py

help_title = "Bot Help"
help_description = "Here's what I do:"
help_fields = [
    ("Remember Messages", "I keep every message you send me, so mention me and I'll throw one back at you."),
    ("Random Sentences", "Now and then I string a few learned words together and drop them in the chat."),
    ("!stats [@user]", "Status, most used word and least used word for you or someone you mention."),
    ("!viewfiles", "Sizes of my data files and how long my script is."),
    ("!randomword german", "A random German word with its English translation."),
    ("!help", "This list right here."),
]

stats_error = "Sorry, there was an error fetching the stats."
files_error = "Sorry, I encountered an error while retrieving file information."
translate_error = "Sorry, there was an error translating the word."
no_foreign_words = "No German words found."
generic_error = "Sorry, something went wrong."

random_word_reply = "**German Word:** {word}\n**Translation:** {translation}"

no_data = "N/A"
