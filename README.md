# gblog

gblog is a command-line tool for keeping a blog whose posts are published as
GitHub Gists. You write each post in Markdown inside its own directory, add any
auxiliary files next to it, keep the whole blog under git, and publish a post as
a gist when it is ready.

## Requirements

- Python 3.10 or later
- `git`, for the blog repository
- The GitHub CLI (`gh`), signed in with `gh auth login`, for publishing and
  for creating the blog repository

## Installation

```
pip install .
```

This installs the `gblog` command. Running `gblog` with no command prints its
help.

## Getting started

Create a blog:

```
gblog init my-blog
gblog init
```

With a name, the blog is created in a directory of that name in your home
directory, and a GitHub repository is always attempted. Without a name, you are
asked for the blog's name (default `gblog-<your user name>`), its location
(default `~/gblog-<your user name>`) and whether to create a GitHub repository.
Press Ctrl+C or Esc to cancel the prompts.

`init` creates the directory, runs `git init`, writes `.gblog/config.json`, a
`README.md`, a `.gitignore` and a `posts/` directory, and makes the first
commit. When a GitHub repository is wanted, it creates a public one with
`gh repo create` and pushes to it; if that fails, a warning is printed and the
local blog is kept.

Run the remaining commands from inside the blog directory. They fail with
"gblog not initialized" when `.gblog/config.json` is missing (`edit` and
`publish` instead need a `posts/` directory).

## Commands

| Command | What it does |
| --- | --- |
| `gblog new` | Asks for a title, an optional description and whether the post is public, then creates `posts/NNNN-slug/` holding `slug.md` and `.meta.json` |
| `gblog list` | Shows every post, highest ID first, with its ID, title, status (Draft/Published), visibility, creation date and gist URL, followed by totals |
| `gblog edit <id>` | Opens the post directory in your file manager (`open`, `xdg-open` or `explorer`); if that fails it prints the directory's path |
| `gblog publish <id>` | Uploads the post's files (hidden files and subdirectories excluded) to a new gist, records the gist's ID and URL in `.meta.json`, and opens it in your browser |
| `gblog publish <id> --update` | Uploads the files again to the gist the post was already published to (`-u` for short) |
| `gblog export [file]` | Writes every post to a zip archive, `gblog-export.zip` by default |

Post IDs are four-digit numbers such as `0001`. They are handed out in order
from the `next_id` value in `.gblog/config.json`. A post's directory name is its
ID followed by a slug of its title: lower case, runs of other characters turned
into hyphens, at most 50 characters.

Publishing a post that already has a gist, without `--update`, only prints the
existing gist's URL.

Private posts are added to `.gitignore` when they are created, so they stay out
of the blog repository. They are published as secret gists.

The `--config` option names a configuration file to report instead of
`.gblog/config.json`: when the file holds valid JSON, gblog prints
`Using config file: <path>` to standard error. The commands themselves always
read and write `.gblog/config.json`.

Errors are printed as `Error: <message>` and the command exits with status 1.

## Export archive layout

Posts are placed in the archive by creation date, oldest first, with every file
in the post directory, hidden ones included:

```
posts/2024/05/17/0001-my-first-post/my-first-post.md
posts/2024/05/17/0001-my-first-post/.meta.json
export-metadata.json
```

`export-metadata.json` records when the export was made, how many posts it
holds, and each post's ID, title, visibility, creation time and gist URL.

## A typical workflow

```
gblog new
gblog edit 0001
git add . && git commit -m "Draft first post"
gblog publish 0001
gblog publish 0001 --update
gblog export
```

## Using it from Python

The pieces behind the commands can be called directly. `gblog.posts` holds the
`PostMeta` and `Config` records with `load_config`, `save_config`, `read_meta`,
`write_meta`, `collect_posts`, `find_post_dir` and `slugify`; `gblog.new.create_post`
creates a post without prompting; `gblog.export.export_posts` and
`gblog.listing.list_posts` do the work of `export` and `list`. Failures raise
`gblog.posts.GblogError`.