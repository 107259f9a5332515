"""String transformations that normalise values before inspection."""