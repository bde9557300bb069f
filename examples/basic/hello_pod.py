"""Parse and render POD in a few lines, zero deps."""

from podhtml import parse, render

SOURCE = """\
=head1 NAME

Foo::Bar - B<frobnicates> things

=head1 SEE ALSO

L<Foo::Bar::create>, L<perlpod/"Formatting Codes">, L<crontab(5)>
"""

doc = parse(
    SOURCE,
    resolve_filename=lambda name: name.replace("::", "/") + ".html",
    resolve_method_anchor=lambda is_class, name: ("class-" if is_class else "") + name,
)
print(render(doc))
